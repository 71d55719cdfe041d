"""Tensor materialization.

Turns one TFLite tensor descriptor into an IR Tensor: element type, reversed
shape, copied constant payload and quantization parameters.
"""

__docformat__ = "restructuredtext"
__all__ = ["materialize_tensor"]

from tflitegraph.errors import MalformedModelError
from tflitegraph.ir import Dimension, QuantizationInfo, Tensor
from tflitegraph.schema import BufferView, QuantizationView, TensorView
from tflitegraph.translate import element_type


def _build_shape(extents: list[int]) -> tuple[Dimension, ...]:
    """Build inner-to-outer dimensions from a row-major extent list.

    :param extents: Extents as declared in the file (outer-to-inner)
    :return: Dimensions in reverse order, min/stride unset
    """
    return tuple(Dimension(extent=extent) for extent in reversed(extents))


def _read_buffer(buffer: BufferView, model_buf: bytes | bytearray) -> bytes:
    """Copy the bytes of a buffer slot.

    :param buffer: Buffer table
    :param model_buf: Whole model bytes (for externally stored data)
    :return: Owned copy of the payload, empty if the slot has no data
    """
    data = buffer.data
    if data is not None:
        return data
    # Models over 2 GiB keep tensor data after the FlatBuffer; offset 1 is a
    # placeholder written by the converter, not a real location.
    offset, size = buffer.offset, buffer.size
    if offset > 1:
        if offset + size > len(model_buf):
            raise MalformedModelError(
                f"Buffer data [{offset}, {offset + size}) exceeds model size {len(model_buf)}"
            )
        return bytes(model_buf[offset : offset + size])
    return b""


def _build_quantization(quant: QuantizationView | None, rank: int) -> QuantizationInfo:
    """Copy quantization parameters, re-deriving the axis for the reversed shape.

    :param quant: Quantization table, or None
    :param rank: Tensor rank
    :return: Quantization info (empty when the tensor is not quantized)
    """
    if quant is None:
        return QuantizationInfo()
    scale = quant.scale
    zero_point = quant.zero_point
    return QuantizationInfo(
        dimension=rank - quant.quantized_dimension,
        scale=() if scale is None else tuple(scale.tolist()),
        zero_point=() if zero_point is None else tuple(zero_point.tolist()),
    )


def materialize_tensor(
    tensor: TensorView,
    buffers: list[BufferView],
    model_buf: bytes | bytearray = b"",
) -> Tensor:
    """Build an IR tensor from a TFLite tensor descriptor.

    Buffer slot 0 means the tensor has no constant data. Any other slot is
    looked up in *buffers* and its bytes are copied, so the returned tensor
    does not reference *model_buf*.

    :param tensor: Tensor descriptor
    :param buffers: Model buffer table
    :param model_buf: Whole model bytes, needed only for external buffers
    :return: Materialized tensor
    :raises MalformedModelError: If the descriptor is missing or its buffer
        index is out of range
    :raises UnsupportedFeatureError: If the element type is not supported
    """
    if tensor is None:
        raise MalformedModelError("Tensor descriptor is required")

    dtype = element_type(tensor.type)
    shape = _build_shape(tensor.shape)

    data = b""
    buffer_index = tensor.buffer
    if buffer_index != 0:
        if buffer_index >= len(buffers):
            raise MalformedModelError(
                f"Tensor '{tensor.name}' buffer index {buffer_index} is out of range "
                f"[0, {len(buffers)})"
            )
        data = _read_buffer(buffers[buffer_index], model_buf)

    return Tensor(
        name=tensor.name,
        type=dtype,
        shape=shape,
        data=data,
        quantization=_build_quantization(tensor.quantization, len(shape)),
    )
