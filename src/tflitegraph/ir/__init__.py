"""Computation graph IR.

Typed tensors and operators produced by the parser.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "ActivationFunction",
    "AddOp",
    "Conv2DOp",
    "DepthwiseConv2DOp",
    "Dimension",
    "ElementType",
    "Model",
    "Operator",
    "PadOp",
    "Padding",
    "QuantizationInfo",
    "Tensor",
]

from tflitegraph.ir.types import (
    ActivationFunction,
    AddOp,
    Conv2DOp,
    DepthwiseConv2DOp,
    Dimension,
    ElementType,
    Model,
    Operator,
    PadOp,
    Padding,
    QuantizationInfo,
    Tensor,
)
