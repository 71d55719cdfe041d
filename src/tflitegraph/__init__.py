__docformat__ = "restructuredtext"
__version__ = "2026.1.0"
__all__ = [
    "MalformedModelError",
    "Model",
    "TFLiteGraph",
    "TFLiteParseError",
    "UnsupportedFeatureError",
    "build_model",
    "supported_operators",
]

from tflitegraph._tflitegraph import TFLiteGraph
from tflitegraph.build import build_model
from tflitegraph.errors import MalformedModelError, TFLiteParseError, UnsupportedFeatureError
from tflitegraph.ir import Model
from tflitegraph.presets import supported_operators
