"""Convolution extractors.

Conv2D and DepthwiseConv2D share the tensor layout: inputs 0, 1, 2 are the
input, filter and bias; output 0 is the result.
"""

__docformat__ = "restructuredtext"
__all__ = ["register_conv_extractors"]

from tflitegraph import translate
from tflitegraph.extract._registry import register_extractor
from tflitegraph.extract._utils import get_options, resolve_tensors
from tflitegraph.ir import Conv2DOp, DepthwiseConv2DOp, Tensor
from tflitegraph.schema import (
    BuiltinOperator,
    Conv2DOptionsView,
    DepthwiseConv2DOptionsView,
    OperatorView,
)


def _extract_conv2d(op: OperatorView, tensors: list[Tensor]) -> Conv2DOp:
    """Extract a CONV_2D operator."""
    options = get_options(op, Conv2DOptionsView, "Conv2D")
    (input_, filter_, bias), output = resolve_tensors(op, tensors, 3, "Conv2D")
    return Conv2DOp(
        input=input_,
        filter=filter_,
        bias=bias,
        output=output,
        stride=(options.stride_w, options.stride_h),
        dilation=(options.dilation_w_factor, options.dilation_h_factor),
        padding=translate.padding(options.padding),
        activation=translate.activation(options.fused_activation_function),
    )


def _extract_depthwise_conv2d(op: OperatorView, tensors: list[Tensor]) -> DepthwiseConv2DOp:
    """Extract a DEPTHWISE_CONV_2D operator."""
    options = get_options(op, DepthwiseConv2DOptionsView, "DepthwiseConv2D")
    (input_, filter_, bias), output = resolve_tensors(op, tensors, 3, "DepthwiseConv2D")
    return DepthwiseConv2DOp(
        input=input_,
        filter=filter_,
        bias=bias,
        output=output,
        depth_multiplier=options.depth_multiplier,
        stride=(options.stride_w, options.stride_h),
        dilation=(options.dilation_w_factor, options.dilation_h_factor),
        padding=translate.padding(options.padding),
        activation=translate.activation(options.fused_activation_function),
    )


def register_conv_extractors() -> None:
    """Register all convolution extractors."""
    register_extractor(BuiltinOperator.CONV_2D, _extract_conv2d)
    register_extractor(BuiltinOperator.DEPTHWISE_CONV_2D, _extract_depthwise_conv2d)
