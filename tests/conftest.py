"""Pytest configuration and shared fixtures for tflitegraph tests."""

import pytest

from tests.test_units.test_tflitegraph.fixtures.synthetic_models import SyntheticTFLiteModels


@pytest.fixture
def conv2d_tflite_path(tmp_path):
    """Create and save a single Conv2D TFLite model."""
    path = tmp_path / "conv2d.tflite"
    path.write_bytes(SyntheticTFLiteModels.create_conv2d_model())
    return str(path)


@pytest.fixture
def chain_tflite_path(tmp_path):
    """Create and save a Pad -> Conv2D -> DepthwiseConv2D -> Add TFLite model."""
    path = tmp_path / "chain.tflite"
    path.write_bytes(SyntheticTFLiteModels.create_chain_model())
    return str(path)
