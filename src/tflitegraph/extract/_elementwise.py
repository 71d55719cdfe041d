"""Extractors for Pad and Add."""

__docformat__ = "restructuredtext"
__all__ = ["register_elementwise_extractors"]

from tflitegraph import translate
from tflitegraph.extract._registry import register_extractor
from tflitegraph.extract._utils import get_options, resolve_tensors
from tflitegraph.ir import AddOp, PadOp, Tensor
from tflitegraph.schema import AddOptionsView, BuiltinOperator, OperatorView


def _extract_pad(op: OperatorView, tensors: list[Tensor]) -> PadOp:
    """Extract a PAD operator.

    PAD has no scalar options; the paddings come from its second input.
    """
    (input_, paddings), output = resolve_tensors(op, tensors, 2, "Pad")
    return PadOp(input=input_, padding=paddings, output=output)


def _extract_add(op: OperatorView, tensors: list[Tensor]) -> AddOp:
    """Extract an ADD operator."""
    options = get_options(op, AddOptionsView, "Add")
    (input1, input2), output = resolve_tensors(op, tensors, 2, "Add")
    return AddOp(
        input1=input1,
        input2=input2,
        output=output,
        activation=translate.activation(options.fused_activation_function),
    )


def register_elementwise_extractors() -> None:
    """Register Pad and Add extractors."""
    register_extractor(BuiltinOperator.PAD, _extract_pad)
    register_extractor(BuiltinOperator.ADD, _extract_add)
