"""Computation graph type definitions.

Defines the in-memory graph handed to an execution engine: a flat,
index-addressable tensor collection and an ordered list of typed operators
that reference those tensors. No FlatBuffers types leak into this module.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "ActivationFunction",
    "AddOp",
    "Conv2DOp",
    "DepthwiseConv2DOp",
    "Dimension",
    "ElementType",
    "Model",
    "Operator",
    "PadOp",
    "Padding",
    "QuantizationInfo",
    "Tensor",
]

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

import numpy as np

from tflitegraph.errors import MalformedModelError


class ElementType(Enum):
    """Tensor element types.

    Values are numpy dtype names, except ``STRING`` which has no fixed-size
    numpy representation.
    """

    FLOAT32 = "float32"
    FLOAT16 = "float16"
    FLOAT64 = "float64"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    BOOL = "bool"
    STRING = "string"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"

    @property
    def numpy_dtype(self) -> np.dtype | None:
        if self is ElementType.STRING:
            return None
        return np.dtype(self.value)


class Padding(Enum):
    """Spatial padding mode of convolution-like operators.

    :cvar SAME: Output has the same spatial size as the input (stride 1)
    :cvar VALID: No implicit padding
    """

    SAME = "same"
    VALID = "valid"


class ActivationFunction(Enum):
    """Activation fused into an operator's output."""

    NONE = "none"
    RELU = "relu"
    RELU_N1_TO_1 = "relu_n1_to_1"
    RELU6 = "relu6"
    TANH = "tanh"
    SIGN_BIT = "sign_bit"


@dataclass(frozen=True)
class Dimension:
    """One dimension of a tensor shape.

    ``min`` and ``stride`` stay unset until the execution engine plans
    storage.

    :param extent: Number of elements along this dimension
    :param min: Index of the first element (unset at parse time)
    :param stride: Distance between consecutive elements (unset at parse time)
    """

    extent: int
    min: int | None = None
    stride: int | None = None


@dataclass(frozen=True)
class QuantizationInfo:
    """Affine quantization parameters of a tensor.

    Empty scale/zero-point sequences mean the tensor is not quantized.

    :param dimension: Quantization axis in inner-to-outer dimension order
    :param scale: Per-channel (or single per-tensor) scales
    :param zero_point: Zero points, parallel to ``scale``
    """

    dimension: int = 0
    scale: tuple[float, ...] = ()
    zero_point: tuple[int, ...] = ()


@dataclass(frozen=True, eq=False)
class Tensor:
    """A tensor descriptor.

    Tensors compare by identity: two descriptors with equal fields are still
    different graph values.

    :param name: Tensor name (may be empty)
    :param type: Element type
    :param shape: Dimensions ordered inner-to-outer (reverse of the file order)
    :param data: Constant payload, empty for tensors supplied at run time
    :param quantization: Quantization parameters
    """

    name: str
    type: ElementType
    shape: tuple[Dimension, ...]
    data: bytes = b""
    quantization: QuantizationInfo = field(default_factory=QuantizationInfo)

    @property
    def rank(self) -> int:
        return len(self.shape)

    @property
    def extents(self) -> tuple[int, ...]:
        """Extents in inner-to-outer order."""
        return tuple(dim.extent for dim in self.shape)

    @property
    def is_constant(self) -> bool:
        return len(self.data) > 0

    @property
    def is_quantized(self) -> bool:
        return len(self.quantization.scale) > 0

    def to_numpy(self) -> np.ndarray:
        """View the constant payload as an array in file (outer-to-inner) order.

        :return: Read-only array over ``data``
        :raises ValueError: If the tensor has no payload or is a string tensor
        """
        dtype = self.type.numpy_dtype
        if dtype is None:
            raise ValueError(f"Tensor '{self.name}' of type {self.type.name} has no numpy dtype")
        if not self.is_constant:
            raise ValueError(f"Tensor '{self.name}' has no constant data")
        return np.frombuffer(self.data, dtype=dtype).reshape(self.extents[::-1])


@dataclass(frozen=True, eq=False)
class Conv2DOp:
    """2D convolution.

    :param stride: (width, height) stride
    :param dilation: (width, height) dilation factors
    """

    op_type: ClassVar[str] = "Conv2D"

    input: Tensor
    filter: Tensor
    bias: Tensor
    output: Tensor
    stride: tuple[int, int]
    dilation: tuple[int, int]
    padding: Padding
    activation: ActivationFunction

    @property
    def inputs(self) -> tuple[Tensor, ...]:
        return (self.input, self.filter, self.bias)


@dataclass(frozen=True, eq=False)
class DepthwiseConv2DOp:
    """Depthwise 2D convolution.

    :param depth_multiplier: Output channels per input channel
    :param stride: (width, height) stride
    :param dilation: (width, height) dilation factors
    """

    op_type: ClassVar[str] = "DepthwiseConv2D"

    input: Tensor
    filter: Tensor
    bias: Tensor
    output: Tensor
    depth_multiplier: int
    stride: tuple[int, int]
    dilation: tuple[int, int]
    padding: Padding
    activation: ActivationFunction

    @property
    def inputs(self) -> tuple[Tensor, ...]:
        return (self.input, self.filter, self.bias)


@dataclass(frozen=True, eq=False)
class PadOp:
    """Constant zero padding; ``padding`` is the [rank, 2] paddings tensor."""

    op_type: ClassVar[str] = "Pad"

    input: Tensor
    padding: Tensor
    output: Tensor

    @property
    def inputs(self) -> tuple[Tensor, ...]:
        return (self.input, self.padding)


@dataclass(frozen=True, eq=False)
class AddOp:
    """Elementwise addition."""

    op_type: ClassVar[str] = "Add"

    input1: Tensor
    input2: Tensor
    output: Tensor
    activation: ActivationFunction

    @property
    def inputs(self) -> tuple[Tensor, ...]:
        return (self.input1, self.input2)


Operator = Conv2DOp | DepthwiseConv2DOp | PadOp | AddOp


@dataclass(frozen=True)
class Model:
    """A parsed single-subgraph model.

    ``tensors[i]`` is the i-th tensor of the source subgraph and ``ops`` is in
    declaration order. Operators, ``inputs`` and ``outputs`` hold references
    to members of ``tensors``, never copies.

    :param tensors: All tensors, index-addressable
    :param ops: Operators in execution order
    :param inputs: Graph input tensors
    :param outputs: Graph output tensors
    :param description: Model description string
    :param version: Schema version of the source file
    """

    tensors: list[Tensor]
    ops: list[Operator]
    inputs: list[Tensor] = field(default_factory=list)
    outputs: list[Tensor] = field(default_factory=list)
    description: str = ""
    version: int = 3

    def tensor_index(self, tensor: Tensor) -> int:
        """Return the slot of *tensor* in ``tensors``.

        :param tensor: A tensor of this model
        :return: Its index
        :raises ValueError: If the tensor does not belong to this model
        """
        for i, t in enumerate(self.tensors):
            if t is tensor:
                return i
        raise ValueError(f"Tensor '{tensor.name}' is not part of this model")

    def validate(self) -> None:
        """Check that every tensor reference points into ``tensors``.

        :raises MalformedModelError: On a dangling reference
        """
        owned = {id(t) for t in self.tensors}
        for i, op in enumerate(self.ops):
            for tensor in (*op.inputs, op.output):
                if id(tensor) not in owned:
                    raise MalformedModelError(
                        f"{op.op_type} operator {i} references tensor '{tensor.name}' "
                        "outside the model"
                    )
        for tensor in (*self.inputs, *self.outputs):
            if id(tensor) not in owned:
                raise MalformedModelError(
                    f"Graph input/output '{tensor.name}' is not a model tensor"
                )
