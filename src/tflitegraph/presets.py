"""Preset constants for TFLite model parsing.

Provides the file identifier and schema version this parser is tested
against, and the list of operator kinds it can decode.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "TFLITE_FILE_IDENTIFIER",
    "TFLITE_SCHEMA_VERSION",
    "supported_operators",
]

from tflitegraph.schema import BuiltinOperator

# Bytes 4..8 of every file written by the TFLite converter
TFLITE_FILE_IDENTIFIER = b"TFL3"

TFLITE_SCHEMA_VERSION = 3


def supported_operators() -> list[BuiltinOperator]:
    """List builtin operator kinds that have a registered extractor.

    :return: Supported operator kinds, sorted by code
    """
    from tflitegraph.extract import EXTRACTORS, ensure_extractors_registered

    ensure_extractors_registered()
    return sorted(EXTRACTORS)
