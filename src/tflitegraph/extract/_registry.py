"""Extractor registry for operator dispatch.

Maps builtin operator kinds to the extractor that decodes them.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "EXTRACTORS",
    "Extractor",
    "get_extractor",
    "register_extractor",
]

from collections.abc import Callable

from tflitegraph.ir import Operator, Tensor
from tflitegraph.schema import BuiltinOperator, OperatorView

# Extractor type: takes an operator descriptor and the tensor store, returns an IR operator
Extractor = Callable[[OperatorView, list[Tensor]], Operator]

# Global extractor registry
EXTRACTORS: dict[BuiltinOperator, Extractor] = {}


def register_extractor(builtin_op: BuiltinOperator, extractor: Extractor) -> None:
    """Register extractor for a builtin operator kind.

    :param builtin_op: Builtin operator (e.g., BuiltinOperator.CONV_2D)
    :param extractor: Extractor function
    """
    EXTRACTORS[builtin_op] = extractor


def get_extractor(builtin_op: BuiltinOperator) -> Extractor | None:
    """Get extractor for a builtin operator kind.

    :param builtin_op: Builtin operator
    :return: Extractor function or None if the kind is unsupported
    """
    return EXTRACTORS.get(builtin_op)
