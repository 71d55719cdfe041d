"""TFLite wire schema.

Enumerations and read-only FlatBuffers table views for TFLite model files.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "ActivationFunctionType",
    "AddOptionsView",
    "BufferView",
    "BuiltinOperator",
    "BuiltinOptions",
    "Conv2DOptionsView",
    "DepthwiseConv2DOptionsView",
    "ModelView",
    "OperatorCodeView",
    "OperatorView",
    "Padding",
    "QuantizationView",
    "SubGraphView",
    "TensorType",
    "TensorView",
    "enum_name",
    "get_builtin_code",
]

from tflitegraph.schema.enums import (
    ActivationFunctionType,
    BuiltinOperator,
    BuiltinOptions,
    Padding,
    TensorType,
    enum_name,
)
from tflitegraph.schema.reader import (
    AddOptionsView,
    BufferView,
    Conv2DOptionsView,
    DepthwiseConv2DOptionsView,
    ModelView,
    OperatorCodeView,
    OperatorView,
    QuantizationView,
    SubGraphView,
    TensorView,
    get_builtin_code,
)
