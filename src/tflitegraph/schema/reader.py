"""Read-only views over a TFLite FlatBuffer.

Each view wraps a ``flatbuffers.table.Table`` positioned on one table of the
schema and exposes its fields as properties. Field numbers follow
tensorflow/lite/schema/schema.fbs; absent fields read as the schema default.
Nothing is copied until a property is read.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "AddOptionsView",
    "BufferView",
    "Conv2DOptionsView",
    "DepthwiseConv2DOptionsView",
    "ModelView",
    "OperatorCodeView",
    "OperatorView",
    "QuantizationView",
    "SubGraphView",
    "TensorView",
    "get_builtin_code",
]

import numpy as np
from flatbuffers import encode, packer
from flatbuffers import number_types as N
from flatbuffers.table import Table

from tflitegraph.errors import MalformedModelError
from tflitegraph.schema.enums import BuiltinOptions


class _TableView:
    """Common field accessors for a FlatBuffers table."""

    __slots__ = ("_tab",)

    def __init__(self, buf: bytes | bytearray, pos: int):
        self._tab = Table(buf, pos)

    def _offset(self, field: int) -> int:
        # vtable entries start after the two uint16 size fields
        return self._tab.Offset(4 + 2 * field)

    def _scalar(self, field: int, flags, default):
        o = self._offset(field)
        if o == 0:
            return default
        return self._tab.Get(flags, o + self._tab.Pos)

    def _string(self, field: int) -> str | None:
        o = self._offset(field)
        if o == 0:
            return None
        return self._vector_bytes(o).decode("utf-8")

    def _table(self, field: int, view_cls):
        o = self._offset(field)
        if o == 0:
            return None
        return view_cls(self._tab.Bytes, self._tab.Indirect(o + self._tab.Pos))

    def _table_vector(self, field: int, view_cls) -> list:
        o = self._offset(field)
        if o == 0:
            return []
        start = self._tab.Vector(o)
        return [
            view_cls(self._tab.Bytes, self._tab.Indirect(start + i * 4))
            for i in range(self._tab.VectorLen(o))
        ]

    def _numpy_vector(self, field: int, flags) -> np.ndarray | None:
        o = self._offset(field)
        if o == 0:
            return None
        return self._tab.GetVectorAsNumpy(flags, o)

    def _int_list(self, field: int) -> list[int]:
        values = self._numpy_vector(field, N.Int32Flags)
        return [] if values is None else values.tolist()

    def _vector_bytes(self, o: int) -> bytes:
        # Slicing past the end would silently return a short copy
        start = self._tab.Vector(o)
        end = start + self._tab.VectorLen(o)
        if end > len(self._tab.Bytes):
            raise MalformedModelError(
                f"Vector data [{start}, {end}) exceeds buffer size {len(self._tab.Bytes)}"
            )
        return bytes(self._tab.Bytes[start:end])

    def _byte_vector(self, field: int) -> bytes | None:
        o = self._offset(field)
        if o == 0:
            return None
        return self._vector_bytes(o)

    def _union(self, field: int) -> Table | None:
        o = self._offset(field)
        if o == 0:
            return None
        tab = Table(bytearray(), 0)
        self._tab.Union(tab, o)
        return tab


class BufferView(_TableView):
    """``Buffer``: raw constant data, inline or at an external offset."""

    __slots__ = ()

    @property
    def data(self) -> bytes | None:
        return self._byte_vector(0)

    @property
    def offset(self) -> int:
        return self._scalar(1, N.Uint64Flags, 0)

    @property
    def size(self) -> int:
        return self._scalar(2, N.Uint64Flags, 0)


class QuantizationView(_TableView):
    """``QuantizationParameters``."""

    __slots__ = ()

    @property
    def scale(self) -> np.ndarray | None:
        return self._numpy_vector(2, N.Float32Flags)

    @property
    def zero_point(self) -> np.ndarray | None:
        return self._numpy_vector(3, N.Int64Flags)

    @property
    def quantized_dimension(self) -> int:
        return self._scalar(6, N.Int32Flags, 0)


class TensorView(_TableView):
    """``Tensor``: a tensor descriptor of a subgraph."""

    __slots__ = ()

    @property
    def shape(self) -> list[int]:
        return self._int_list(0)

    @property
    def type(self) -> int:
        return self._scalar(1, N.Int8Flags, 0)

    @property
    def buffer(self) -> int:
        return self._scalar(2, N.Uint32Flags, 0)

    @property
    def name(self) -> str:
        return self._string(3) or ""

    @property
    def quantization(self) -> QuantizationView | None:
        return self._table(4, QuantizationView)


class Conv2DOptionsView(_TableView):
    """``Conv2DOptions``."""

    __slots__ = ()
    OPTIONS_TYPE = BuiltinOptions.Conv2DOptions

    @property
    def padding(self) -> int:
        return self._scalar(0, N.Int8Flags, 0)

    @property
    def stride_w(self) -> int:
        return self._scalar(1, N.Int32Flags, 0)

    @property
    def stride_h(self) -> int:
        return self._scalar(2, N.Int32Flags, 0)

    @property
    def fused_activation_function(self) -> int:
        return self._scalar(3, N.Int8Flags, 0)

    @property
    def dilation_w_factor(self) -> int:
        return self._scalar(4, N.Int32Flags, 1)

    @property
    def dilation_h_factor(self) -> int:
        return self._scalar(5, N.Int32Flags, 1)


class DepthwiseConv2DOptionsView(_TableView):
    """``DepthwiseConv2DOptions``: Conv2D fields plus ``depth_multiplier``."""

    __slots__ = ()
    OPTIONS_TYPE = BuiltinOptions.DepthwiseConv2DOptions

    @property
    def padding(self) -> int:
        return self._scalar(0, N.Int8Flags, 0)

    @property
    def stride_w(self) -> int:
        return self._scalar(1, N.Int32Flags, 0)

    @property
    def stride_h(self) -> int:
        return self._scalar(2, N.Int32Flags, 0)

    @property
    def depth_multiplier(self) -> int:
        return self._scalar(3, N.Int32Flags, 0)

    @property
    def fused_activation_function(self) -> int:
        return self._scalar(4, N.Int8Flags, 0)

    @property
    def dilation_w_factor(self) -> int:
        return self._scalar(5, N.Int32Flags, 1)

    @property
    def dilation_h_factor(self) -> int:
        return self._scalar(6, N.Int32Flags, 1)


class AddOptionsView(_TableView):
    """``AddOptions``."""

    __slots__ = ()
    OPTIONS_TYPE = BuiltinOptions.AddOptions

    @property
    def fused_activation_function(self) -> int:
        return self._scalar(0, N.Int8Flags, 0)


class OperatorView(_TableView):
    """``Operator``: one node of a subgraph."""

    __slots__ = ()

    @property
    def opcode_index(self) -> int:
        return self._scalar(0, N.Uint32Flags, 0)

    @property
    def inputs(self) -> list[int]:
        return self._int_list(1)

    @property
    def outputs(self) -> list[int]:
        return self._int_list(2)

    @property
    def builtin_options_type(self) -> int:
        return self._scalar(3, N.Uint8Flags, 0)

    def builtin_options_as(self, view_cls):
        """Return the option table as *view_cls*, or None if absent.

        :param view_cls: Option view class with an ``OPTIONS_TYPE`` attribute
        :return: Option view, or None when the operator has no option table
            or the table is of a different union type
        """
        if self.builtin_options_type != view_cls.OPTIONS_TYPE:
            return None
        tab = self._union(4)
        if tab is None:
            return None
        return view_cls(tab.Bytes, tab.Pos)


class OperatorCodeView(_TableView):
    """``OperatorCode``: an entry of the model's operator code table."""

    __slots__ = ()

    @property
    def deprecated_builtin_code(self) -> int:
        return self._scalar(0, N.Int8Flags, 0)

    @property
    def custom_code(self) -> str | None:
        return self._string(1)

    @property
    def builtin_code(self) -> int:
        return self._scalar(3, N.Int32Flags, 0)


class SubGraphView(_TableView):
    """``SubGraph``: tensors, operators and graph inputs/outputs."""

    __slots__ = ()

    @property
    def tensors(self) -> list[TensorView]:
        return self._table_vector(0, TensorView)

    @property
    def inputs(self) -> list[int]:
        return self._int_list(1)

    @property
    def outputs(self) -> list[int]:
        return self._int_list(2)

    @property
    def operators(self) -> list[OperatorView]:
        return self._table_vector(3, OperatorView)



class ModelView(_TableView):
    """``Model``: the root table of a TFLite file."""

    __slots__ = ()

    @classmethod
    def from_bytes(cls, buf: bytes | bytearray) -> "ModelView":
        """Position a view on the root table of *buf*."""
        return cls(buf, encode.Get(packer.uoffset, buf, 0))

    @property
    def buf(self) -> bytes | bytearray:
        return self._tab.Bytes

    @property
    def version(self) -> int:
        return self._scalar(0, N.Uint32Flags, 0)

    @property
    def operator_codes(self) -> list[OperatorCodeView]:
        return self._table_vector(1, OperatorCodeView)

    @property
    def subgraphs(self) -> list[SubGraphView]:
        return self._table_vector(2, SubGraphView)

    @property
    def description(self) -> str:
        return self._string(3) or ""

    @property
    def buffers(self) -> list[BufferView]:
        return self._table_vector(4, BufferView)


def get_builtin_code(opcode: OperatorCodeView) -> int:
    """Return the effective builtin operator code of an operator code entry.

    Older files only fill the int8 ``deprecated_builtin_code``; newer ones
    write ``builtin_code`` and clamp the deprecated field to 127.

    :param opcode: Operator code entry
    :return: The larger of the two code fields
    """
    return max(opcode.builtin_code, opcode.deprecated_builtin_code)
