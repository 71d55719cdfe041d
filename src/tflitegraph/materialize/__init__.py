"""Tensor materialization.

Converts TFLite tensor descriptors to IR tensors.
"""

__docformat__ = "restructuredtext"
__all__ = ["materialize_tensor"]

from tflitegraph.materialize.tensor import materialize_tensor
