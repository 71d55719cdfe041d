"""Graph construction.

This module builds the IR Model from TFLite FlatBuffer bytes.
"""

__docformat__ = "restructuredtext"
__all__ = ["build_model", "build_model_from_view"]

from tflitegraph.build.builder import build_model, build_model_from_view
