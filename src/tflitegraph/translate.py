"""TFLite enumeration to IR enumeration mapping.

Each supported wire code maps to exactly one internal value. A code with no
mapping means the model was produced by a schema version this parser does not
handle, so it is rejected rather than guessed.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "ACTIVATION_MAP",
    "ELEMENT_TYPE_MAP",
    "PADDING_MAP",
    "activation",
    "builtin_operator",
    "element_type",
    "padding",
]

from enum import IntEnum

from tflitegraph.errors import UnsupportedFeatureError
from tflitegraph.ir import ActivationFunction, ElementType, Padding
from tflitegraph.schema import (
    ActivationFunctionType,
    BuiltinOperator,
    TensorType,
    enum_name,
)
from tflitegraph.schema import Padding as WirePadding

ELEMENT_TYPE_MAP: dict[int, ElementType] = {
    TensorType.FLOAT32: ElementType.FLOAT32,
    TensorType.FLOAT16: ElementType.FLOAT16,
    TensorType.INT32: ElementType.INT32,
    TensorType.UINT8: ElementType.UINT8,
    TensorType.INT64: ElementType.INT64,
    TensorType.STRING: ElementType.STRING,
    TensorType.BOOL: ElementType.BOOL,
    TensorType.INT16: ElementType.INT16,
    TensorType.COMPLEX64: ElementType.COMPLEX64,
    TensorType.INT8: ElementType.INT8,
    TensorType.FLOAT64: ElementType.FLOAT64,
    TensorType.COMPLEX128: ElementType.COMPLEX128,
}

PADDING_MAP: dict[int, Padding] = {
    WirePadding.SAME: Padding.SAME,
    WirePadding.VALID: Padding.VALID,
}

ACTIVATION_MAP: dict[int, ActivationFunction] = {
    ActivationFunctionType.NONE: ActivationFunction.NONE,
    ActivationFunctionType.RELU: ActivationFunction.RELU,
    ActivationFunctionType.RELU_N1_TO_1: ActivationFunction.RELU_N1_TO_1,
    ActivationFunctionType.RELU6: ActivationFunction.RELU6,
    ActivationFunctionType.TANH: ActivationFunction.TANH,
    ActivationFunctionType.SIGN_BIT: ActivationFunction.SIGN_BIT,
}


def _lookup(mapping: dict, wire_enum: type[IntEnum], code: int, what: str):
    result = mapping.get(code)
    if result is None:
        raise UnsupportedFeatureError(
            f"{what} {enum_name(wire_enum, code)} (code {code}) is not supported"
        )
    return result


def element_type(code: int) -> ElementType:
    """Map a ``TensorType`` wire code to an element type.

    :param code: TensorType value
    :return: Element type
    :raises UnsupportedFeatureError: If the type has no internal counterpart
    """
    return _lookup(ELEMENT_TYPE_MAP, TensorType, code, "Tensor type")


def padding(code: int) -> Padding:
    """Map a ``Padding`` wire code to a padding mode."""
    return _lookup(PADDING_MAP, WirePadding, code, "Padding")


def activation(code: int) -> ActivationFunction:
    """Map an ``ActivationFunctionType`` wire code to a fused activation."""
    return _lookup(ACTIVATION_MAP, ActivationFunctionType, code, "Activation function")


def builtin_operator(code: int) -> BuiltinOperator:
    """Map an effective builtin code to a ``BuiltinOperator``.

    :param code: Effective builtin code of an operator code entry
    :return: Builtin operator kind
    :raises UnsupportedFeatureError: If the code is newer than the known schema
    """
    try:
        return BuiltinOperator(code)
    except ValueError as error:
        raise UnsupportedFeatureError(
            f"Builtin operator code {code} is not supported"
        ) from error
