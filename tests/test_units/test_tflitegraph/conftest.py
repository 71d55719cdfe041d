"""Shared pytest configuration and fixtures for tflitegraph unit tests.

This module provides:
- Model fixtures (TFLite FlatBuffer bytes built without TensorFlow)
- Parsed model fixtures
"""

import pytest

from tests.test_units.test_tflitegraph.fixtures.synthetic_models import SyntheticTFLiteModels
from tflitegraph.build import build_model

# ===== Model Bytes Fixtures =====


@pytest.fixture
def conv2d_model():
    """Single Conv2D model bytes."""
    return SyntheticTFLiteModels.create_conv2d_model()


@pytest.fixture
def depthwise_conv2d_model():
    """Single DepthwiseConv2D model bytes."""
    return SyntheticTFLiteModels.create_depthwise_conv2d_model()


@pytest.fixture
def pad_model():
    """Single Pad model bytes."""
    return SyntheticTFLiteModels.create_pad_model()


@pytest.fixture
def add_model():
    """Single Add model bytes."""
    return SyntheticTFLiteModels.create_add_model()


@pytest.fixture
def chain_model():
    """Pad -> Conv2D -> DepthwiseConv2D -> Add model bytes."""
    return SyntheticTFLiteModels.create_chain_model()


@pytest.fixture
def quantized_model():
    """Per-channel quantized int8 tensor model bytes."""
    return SyntheticTFLiteModels.create_quantized_model()


@pytest.fixture
def custom_op_model():
    """Model with a custom operator."""
    return SyntheticTFLiteModels.create_custom_op_model()


# ===== Parsed Model Fixtures =====


@pytest.fixture
def parsed_conv2d(conv2d_model):
    """Parsed single Conv2D model."""
    return build_model(conv2d_model)


@pytest.fixture
def parsed_chain(chain_model):
    """Parsed chain model."""
    return build_model(chain_model)
