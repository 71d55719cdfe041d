"""Exceptions raised while parsing a TFLite model.

Both error classes abort the parse; no partial model is ever returned.
"""

__docformat__ = "restructuredtext"
__all__ = ["MalformedModelError", "TFLiteParseError", "UnsupportedFeatureError"]


class TFLiteParseError(Exception):
    """Base class for all model parsing failures."""


class MalformedModelError(TFLiteParseError, ValueError):
    """The model violates a structural precondition.

    Raised for missing required fields, a subgraph count other than one,
    out-of-range tensor/buffer/opcode indices and truncated buffers.
    """


class UnsupportedFeatureError(TFLiteParseError, NotImplementedError):
    """The model is well-formed but uses something this parser does not handle.

    Raised for custom operators, builtin operators without an extractor and
    enumeration values without an internal counterpart.
    """
