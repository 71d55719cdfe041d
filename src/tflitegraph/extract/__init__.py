"""Operator parameter extraction.

Extractor registry and operator-specific decoders.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "EXTRACTORS",
    "ensure_extractors_registered",
    "get_extractor",
    "register_conv_extractors",
    "register_elementwise_extractors",
    "register_extractor",
]

from tflitegraph.extract._conv import register_conv_extractors
from tflitegraph.extract._elementwise import register_elementwise_extractors
from tflitegraph.extract._registry import EXTRACTORS, get_extractor, register_extractor


_builtins_registered = False


def ensure_extractors_registered() -> None:
    """Register the builtin extractors once, on first use.

    Extractors registered by the caller before the first parse are kept, and
    take precedence over a builtin one for the same kind.
    """
    global _builtins_registered
    if _builtins_registered:
        return
    overrides = dict(EXTRACTORS)
    register_conv_extractors()
    register_elementwise_extractors()
    EXTRACTORS.update(overrides)
    _builtins_registered = True
