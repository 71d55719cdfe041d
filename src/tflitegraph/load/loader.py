"""TFLite model loading utilities."""

__docformat__ = "restructuredtext"
__all__ = ["check_tflite_bytes", "load_tflite_model", "read_tflite_bytes"]

import warnings
from pathlib import Path

from flatbuffers import util

from tflitegraph.build import build_model
from tflitegraph.errors import MalformedModelError
from tflitegraph.ir import Model
from tflitegraph.presets import TFLITE_FILE_IDENTIFIER, TFLITE_SCHEMA_VERSION

# Root offset (4 bytes) followed by the file identifier (4 bytes)
MIN_MODEL_SIZE = 8


def read_tflite_bytes(path: str | Path) -> bytes:
    """Read a whole model file into memory.

    :param path: Path to a .tflite file
    :return: File contents
    :raises FileNotFoundError: If the file does not exist
    """
    return Path(path).read_bytes()


def check_tflite_bytes(buf: bytes | bytearray) -> None:
    """Sanity-check model bytes before parsing.

    A missing ``TFL3`` identifier only produces a warning since some older
    converters did not write one.

    :param buf: Model bytes
    :raises MalformedModelError: If the buffer is too small to hold a root table
    """
    if len(buf) < MIN_MODEL_SIZE:
        raise MalformedModelError(
            f"TFLite buffer of {len(buf)} bytes is too small, need at least {MIN_MODEL_SIZE}"
        )
    if not util.BufferHasIdentifier(buf, 0, TFLITE_FILE_IDENTIFIER):
        warnings.warn(
            f"Buffer has no {TFLITE_FILE_IDENTIFIER.decode()} file identifier; "
            "parsing it as a TFLite model anyway.",
            UserWarning,
            stacklevel=2,
        )


def _check_version(model: Model) -> None:
    """Warn when the schema version differs from the tested one.

    :param model: Parsed model
    """
    if model.version != TFLITE_SCHEMA_VERSION:
        warnings.warn(
            f"Model schema version {model.version} differs from "
            f"tested version {TFLITE_SCHEMA_VERSION}.",
            UserWarning,
            stacklevel=3,
        )


def load_tflite_model(source: str | Path | bytes | bytearray) -> Model:
    """Load and parse a TFLite model.

    Steps:
    1. Read the file (when *source* is a path)
    2. Check buffer size and file identifier
    3. Build the IR Model
    4. Warn on an untested schema version

    :param source: Path to a .tflite file, or the model bytes
    :return: Parsed model
    """
    buf = source if isinstance(source, bytes | bytearray) else read_tflite_bytes(source)
    check_tflite_bytes(buf)
    model = build_model(buf)
    _check_version(model)
    return model
