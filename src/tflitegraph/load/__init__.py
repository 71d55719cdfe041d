"""Model loading.

This module reads TFLite model bytes and checks them before graph construction.
"""

__docformat__ = "restructuredtext"
__all__ = ["check_tflite_bytes", "load_tflite_model", "read_tflite_bytes"]

from tflitegraph.load.loader import check_tflite_bytes, load_tflite_model, read_tflite_bytes
