"""Graph builder.

Builds the IR Model from TFLite FlatBuffer bytes in one pass: validate the
subgraph count, materialize every tensor, then materialize every operator.
Operators resolve tensor indices into the already complete tensor list.
"""

__docformat__ = "restructuredtext"
__all__ = ["build_model", "build_model_from_view"]

import struct

from tflitegraph.errors import MalformedModelError, TFLiteParseError, UnsupportedFeatureError
from tflitegraph.extract import ensure_extractors_registered, get_extractor
from tflitegraph.ir import Model, Operator, Tensor
from tflitegraph.materialize import materialize_tensor
from tflitegraph.schema import (
    BuiltinOperator,
    ModelView,
    OperatorCodeView,
    OperatorView,
    SubGraphView,
    get_builtin_code,
)
from tflitegraph.translate import builtin_operator


def _get_subgraph(model: ModelView) -> SubGraphView:
    """Return the only subgraph of *model*.

    :param model: Model view
    :return: The single subgraph
    :raises MalformedModelError: If the model has zero or several subgraphs
    """
    subgraphs = model.subgraphs
    if len(subgraphs) != 1:
        raise MalformedModelError(
            f"Only 1 subgraph is currently supported, model has {len(subgraphs)}"
        )
    return subgraphs[0]


def _get_opcode(op: OperatorView, opcodes: list[OperatorCodeView]) -> OperatorCodeView:
    index = op.opcode_index
    if index >= len(opcodes):
        raise MalformedModelError(
            f"Operator code index {index} is out of range [0, {len(opcodes)})"
        )
    return opcodes[index]


def _build_operator(
    op: OperatorView,
    opcodes: list[OperatorCodeView],
    tensors: list[Tensor],
) -> Operator:
    """Dispatch one operator descriptor to its extractor.

    :param op: Operator descriptor
    :param opcodes: Model operator code table
    :param tensors: Materialized tensor store
    :return: IR operator
    :raises UnsupportedFeatureError: For custom operators and builtin kinds
        without an extractor
    """
    opcode = _get_opcode(op, opcodes)
    builtin_op = builtin_operator(get_builtin_code(opcode))
    if builtin_op == BuiltinOperator.CUSTOM:
        raise UnsupportedFeatureError(
            f"Custom operator '{opcode.custom_code or ''}' is not supported"
        )

    extractor = get_extractor(builtin_op)
    if extractor is None:
        raise UnsupportedFeatureError(f"Unsupported op {builtin_op.name}")
    return extractor(op, tensors)


def _resolve_graph_tensors(indices: list[int], tensors: list[Tensor], role: str) -> list[Tensor]:
    resolved = []
    for index in indices:
        if not 0 <= index < len(tensors):
            raise MalformedModelError(
                f"Graph {role} tensor index {index} is out of range [0, {len(tensors)})"
            )
        resolved.append(tensors[index])
    return resolved


def build_model_from_view(model: ModelView) -> Model:
    """Build the IR Model from a positioned model view.

    :param model: Root model view
    :return: Fully populated Model
    """
    ensure_extractors_registered()

    subgraph = _get_subgraph(model)

    buffers = model.buffers
    tensors = [materialize_tensor(t, buffers, model.buf) for t in subgraph.tensors]

    opcodes = model.operator_codes
    ops = [_build_operator(op, opcodes, tensors) for op in subgraph.operators]

    return Model(
        tensors=tensors,
        ops=ops,
        inputs=_resolve_graph_tensors(subgraph.inputs, tensors, "input"),
        outputs=_resolve_graph_tensors(subgraph.outputs, tensors, "output"),
        description=model.description,
        version=model.version,
    )


def build_model(buf: bytes | bytearray) -> Model:
    """Parse TFLite FlatBuffer bytes into an IR Model.

    The parse is all-or-nothing: any structural problem raises
    MalformedModelError and any unsupported feature raises
    UnsupportedFeatureError. All names, shapes and payloads are copied, so
    the returned Model does not keep *buf* alive.

    :param buf: Complete model bytes
    :return: Fully populated Model
    """
    if buf is None:
        raise MalformedModelError("Model buffer is required")
    try:
        return build_model_from_view(ModelView.from_bytes(buf))
    except TFLiteParseError:
        raise
    except (struct.error, IndexError, ValueError) as error:
        raise MalformedModelError(f"Truncated or corrupt TFLite buffer: {error}") from error
