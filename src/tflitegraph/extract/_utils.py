"""Shared helpers for operator extractors."""

__docformat__ = "restructuredtext"
__all__ = ["get_options", "resolve_tensors"]

from tflitegraph.errors import MalformedModelError
from tflitegraph.ir import Tensor
from tflitegraph.schema import BuiltinOptions, OperatorView, enum_name


def _resolve(indices: list[int], count: int, tensors: list[Tensor], op_name: str, role: str):
    if len(indices) < count:
        raise MalformedModelError(
            f"{op_name} expects at least {count} {role}s, got {len(indices)}"
        )
    resolved = []
    for position in range(count):
        index = indices[position]
        if not 0 <= index < len(tensors):
            raise MalformedModelError(
                f"{op_name} {role} {position} tensor index {index} is out of range "
                f"[0, {len(tensors)})"
            )
        resolved.append(tensors[index])
    return resolved


def resolve_tensors(
    op: OperatorView,
    tensors: list[Tensor],
    num_inputs: int,
    op_name: str,
) -> tuple[list[Tensor], Tensor]:
    """Resolve the leading input indices and the first output index of *op*.

    :param op: Operator descriptor
    :param tensors: Fully materialized tensor store
    :param num_inputs: Number of leading inputs the operator kind uses
    :param op_name: Operator name for error messages
    :return: (inputs, output) referencing members of *tensors*
    :raises MalformedModelError: If a list is too short or an index is out of range
    """
    inputs = _resolve(op.inputs, num_inputs, tensors, op_name, "input")
    (output,) = _resolve(op.outputs, 1, tensors, op_name, "output")
    return inputs, output


def get_options(op: OperatorView, view_cls, op_name: str):
    """Return the option table of *op* as *view_cls*.

    :param op: Operator descriptor
    :param view_cls: Expected option view class
    :param op_name: Operator name for error messages
    :return: Option view
    :raises MalformedModelError: If the table is missing or of another type
    """
    options = op.builtin_options_as(view_cls)
    if options is None:
        actual = enum_name(BuiltinOptions, op.builtin_options_type)
        raise MalformedModelError(
            f"{op_name} requires {view_cls.OPTIONS_TYPE.name}, got {actual}"
        )
    return options
