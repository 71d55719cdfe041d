"""Tests for tensor materialization.

This module tests converting TFLite tensor descriptors to IR tensors:
- Shape reversal to inner-to-outer order
- Constant payload copying (buffer slot 0, empty slots, external buffers)
- Quantization axis re-derivation and parameter copying

Test Coverage:
- TestShape: 4 tests - Dimension order and unset storage fields
- TestPayload: 6 tests - Buffer slot handling
- TestQuantization: 5 tests - Quantization metadata
"""

import numpy as np
import pytest

from tests.test_units.test_tflitegraph.fixtures.synthetic_models import SyntheticTFLiteModels
from tflitegraph.errors import MalformedModelError, UnsupportedFeatureError
from tflitegraph.ir import ElementType, QuantizationInfo
from tflitegraph.materialize import materialize_tensor
from tflitegraph.schema import ModelView, TensorType


def _materialize_all(buf):
    model = ModelView.from_bytes(buf)
    buffers = model.buffers
    return [materialize_tensor(t, buffers, buf) for t in model.subgraphs[0].tensors]


class TestShape:
    """Test shape reversal."""

    def test_shape_is_reversed(self):
        """Test declared [a, b, c] becomes [c, b, a]."""
        buf = SyntheticTFLiteModels.create_tensor_model([{"name": "t", "shape": [2, 5, 7]}])
        (tensor,) = _materialize_all(buf)
        assert tensor.extents == (7, 5, 2)

    def test_rank_matches_declared_length(self):
        """Test rank equals the declared shape length."""
        buf = SyntheticTFLiteModels.create_tensor_model(
            [
                {"name": "scalar", "shape": []},
                {"name": "vec", "shape": [4]},
                {"name": "nhwc", "shape": [1, 4, 4, 3]},
            ]
        )
        tensors = _materialize_all(buf)
        assert [t.rank for t in tensors] == [0, 1, 4]

    def test_storage_fields_unset(self):
        """Test min and stride are left for the execution engine."""
        buf = SyntheticTFLiteModels.create_tensor_model([{"name": "t", "shape": [3, 2]}])
        (tensor,) = _materialize_all(buf)
        assert all(dim.min is None and dim.stride is None for dim in tensor.shape)

    def test_name_and_type(self):
        """Test name and element type are carried over."""
        buf = SyntheticTFLiteModels.create_tensor_model(
            [{"name": "ids", "shape": [8], "type": TensorType.INT64}]
        )
        (tensor,) = _materialize_all(buf)
        assert tensor.name == "ids"
        assert tensor.type is ElementType.INT64


class TestPayload:
    """Test constant payload handling."""

    def test_slot_zero_has_no_payload(self):
        """Test buffer slot 0 means runtime data even when slot 0 holds bytes."""
        buf = SyntheticTFLiteModels.create_tensor_model(
            [{"name": "t", "shape": [2]}], buffers=[b"\x01\x02\x03\x04"]
        )
        (tensor,) = _materialize_all(buf)
        assert tensor.data == b""
        assert not tensor.is_constant

    def test_payload_copied_verbatim(self):
        """Test a slot with L bytes gives a payload of exactly those L bytes."""
        values = np.arange(6, dtype=np.float32)
        buf = SyntheticTFLiteModels.create_tensor_model(
            [{"name": "w", "shape": [2, 3], "buffer": 1}], buffers=[None, values.tobytes()]
        )
        (tensor,) = _materialize_all(buf)
        assert isinstance(tensor.data, bytes)
        assert len(tensor.data) == values.nbytes
        assert tensor.data == values.tobytes()
        np.testing.assert_array_equal(tensor.to_numpy(), values.reshape(2, 3))

    def test_empty_slot_is_empty_payload(self):
        """Test a slot without data yields an empty payload, not an error."""
        buf = SyntheticTFLiteModels.create_tensor_model(
            [{"name": "t", "shape": [2], "buffer": 1}], buffers=[None, None]
        )
        (tensor,) = _materialize_all(buf)
        assert tensor.data == b""

    def test_zero_length_slot_is_empty_payload(self):
        """Test a slot with a zero-length data vector yields an empty payload."""
        buf = SyntheticTFLiteModels.create_tensor_model(
            [{"name": "t", "shape": [0], "buffer": 1}], buffers=[None, b""]
        )
        (tensor,) = _materialize_all(buf)
        assert tensor.data == b""

    def test_buffer_index_out_of_range(self):
        """Test a buffer index beyond the buffer table is malformed."""
        buf = SyntheticTFLiteModels.create_tensor_model(
            [{"name": "t", "shape": [2], "buffer": 5}], buffers=[None]
        )
        with pytest.raises(MalformedModelError, match="buffer index 5"):
            _materialize_all(buf)

    def test_external_buffer(self):
        """Test data stored after the FlatBuffer is resolved by offset and size."""
        payload = bytes(range(16))
        buf = SyntheticTFLiteModels.create_external_buffer_model(payload)
        (tensor,) = _materialize_all(buf)
        assert tensor.data == payload


class TestQuantization:
    """Test quantization metadata."""

    def test_not_quantized(self):
        """Test a tensor without quantization table has empty parameters."""
        buf = SyntheticTFLiteModels.create_tensor_model([{"name": "t", "shape": [2]}])
        (tensor,) = _materialize_all(buf)
        assert tensor.quantization == QuantizationInfo()
        assert not tensor.is_quantized

    @pytest.mark.parametrize("axis", [0, 1, 3])
    def test_axis_reversed(self, axis):
        """Test declared axis k on a rank-n tensor becomes n - k."""
        buf = SyntheticTFLiteModels.create_quantized_model(quantized_dimension=axis)
        (tensor,) = _materialize_all(buf)
        assert tensor.quantization.dimension == 4 - axis

    def test_scale_and_zero_point_copied(self):
        """Test scale and zero point are copied in order."""
        buf = SyntheticTFLiteModels.create_quantized_model()
        (tensor,) = _materialize_all(buf)
        assert tensor.quantization.scale == (0.5, 0.25, 0.125, 0.0625)
        assert tensor.quantization.zero_point == (0, 0, 1, -1)
        assert tensor.is_quantized

    def test_missing_zero_point(self):
        """Test an absent zero point sequence is empty, not an error."""
        buf = SyntheticTFLiteModels.create_tensor_model(
            [{"name": "t", "shape": [1, 2], "quantization": {"scale": [0.1]}}]
        )
        (tensor,) = _materialize_all(buf)
        assert tensor.quantization.scale == pytest.approx((0.1,))
        assert tensor.quantization.zero_point == ()
        assert tensor.quantization.dimension == 2

    def test_unsupported_element_type(self):
        """Test a tensor of an unsupported type fails naming the type."""
        buf = SyntheticTFLiteModels.create_tensor_model(
            [{"name": "t", "shape": [2], "type": TensorType.BFLOAT16}]
        )
        with pytest.raises(UnsupportedFeatureError, match="BFLOAT16"):
            _materialize_all(buf)


def test_missing_descriptor():
    """Test a None descriptor is a precondition violation."""
    with pytest.raises(MalformedModelError, match="required"):
        materialize_tensor(None, [])
