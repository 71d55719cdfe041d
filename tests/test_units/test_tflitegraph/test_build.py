"""Tests for graph building.

This module tests the end-to-end build from FlatBuffer bytes to the IR Model:
- Tensor store size, order and ranks
- Operator order and tensor reference identity
- Graph inputs/outputs and model metadata
- Effective builtin operator code resolution

Test Coverage:
- TestConv2DScenario: 4 tests - Single Conv2D model
- TestChainModel: 6 tests - Multi-operator model
- TestOperatorCodes: 3 tests - Deprecated and extended builtin codes
- TestModelMetadata: 3 tests - Description, version and empty graphs
"""

import pytest

from tests.test_units.test_tflitegraph.fixtures.synthetic_models import (
    SyntheticTFLiteModels,
    make_model,
)
from tflitegraph.build import build_model
from tflitegraph.errors import UnsupportedFeatureError
from tflitegraph.ir import (
    ActivationFunction,
    AddOp,
    Conv2DOp,
    DepthwiseConv2DOp,
    ElementType,
    Model,
    PadOp,
    Padding,
)
from tflitegraph.schema import BuiltinOperator


class TestConv2DScenario:
    """Test a model with one Conv2D operator."""

    def test_tensor_store(self, parsed_conv2d):
        """Test four tensors in file order with their ranks."""
        model = parsed_conv2d
        assert isinstance(model, Model)
        assert [t.name for t in model.tensors] == ["input", "filter", "bias", "output"]
        assert [t.rank for t in model.tensors] == [4, 4, 1, 4]
        assert model.tensors[0].extents == (3, 4, 4, 1)

    def test_single_conv2d(self, parsed_conv2d):
        """Test the operator references tensor slots 0..3."""
        model = parsed_conv2d
        assert len(model.ops) == 1
        op = model.ops[0]
        assert isinstance(op, Conv2DOp)
        assert op.input is model.tensors[0]
        assert op.filter is model.tensors[1]
        assert op.bias is model.tensors[2]
        assert op.output is model.tensors[3]
        assert model.tensor_index(op.filter) == 1

    def test_conv2d_params(self, parsed_conv2d):
        """Test default stride, dilation, padding and activation."""
        op = parsed_conv2d.ops[0]
        assert op.stride == (1, 1)
        assert op.dilation == (1, 1)
        assert op.padding is Padding.SAME
        assert op.activation is ActivationFunction.NONE

    def test_constants_materialized(self, parsed_conv2d):
        """Test filter and bias carry payloads while activations do not."""
        model = parsed_conv2d
        assert model.tensors[1].is_constant
        assert model.tensors[2].is_constant
        assert not model.tensors[0].is_constant
        assert not model.tensors[3].is_constant
        assert model.tensors[1].to_numpy().shape == (2, 3, 3, 3)


class TestChainModel:
    """Test a model with several operators."""

    def test_operator_order(self, parsed_chain):
        """Test operators keep file order regardless of operator code order."""
        kinds = [type(op) for op in parsed_chain.ops]
        assert kinds == [PadOp, Conv2DOp, DepthwiseConv2DOp, AddOp]

    def test_shared_tensor_identity(self, parsed_chain):
        """Test a producer's output is the same object as the consumer's input."""
        pad, conv, dw, add = parsed_chain.ops
        assert pad.output is conv.input
        assert conv.output is dw.input
        assert dw.output is add.input1

    def test_graph_input_reused_by_residual(self, parsed_chain):
        """Test the graph input and the residual Add input are one object."""
        pad, _, _, add = parsed_chain.ops
        assert pad.input is parsed_chain.inputs[0]
        assert add.input2 is parsed_chain.inputs[0]

    def test_graph_inputs_outputs(self, parsed_chain):
        """Test graph boundary tensors resolve to tensor store members."""
        assert [parsed_chain.tensor_index(t) for t in parsed_chain.inputs] == [0]
        assert [parsed_chain.tensor_index(t) for t in parsed_chain.outputs] == [9]
        assert parsed_chain.outputs[0] is parsed_chain.ops[-1].output

    def test_every_reference_is_in_store(self, parsed_chain):
        """Test every operator tensor is one of the model's tensors."""
        store = {id(t) for t in parsed_chain.tensors}
        for op in parsed_chain.ops:
            for tensor in (*op.inputs, op.output):
                assert id(tensor) in store
        parsed_chain.validate()

    def test_paddings_tensor(self, parsed_chain):
        """Test the Pad paddings tensor is an int32 constant."""
        pad = parsed_chain.ops[0]
        assert pad.padding.type is ElementType.INT32
        assert pad.padding.extents == (2, 4)
        assert pad.padding.is_constant


class TestOperatorCodes:
    """Test effective builtin code resolution."""

    def test_deprecated_code_only(self):
        """Test a file that only fills the deprecated code field."""
        buf = SyntheticTFLiteModels.create_single_op_model(
            {"deprecated_builtin_code": BuiltinOperator.PAD}
        )
        model = build_model(buf)
        assert isinstance(model.ops[0], PadOp)

    def test_extended_code_field(self):
        """Test a code above 127 is read from the extended field."""
        buf = SyntheticTFLiteModels.create_single_op_model(
            {"builtin_code": BuiltinOperator.GELU, "deprecated_builtin_code": 127}
        )
        with pytest.raises(UnsupportedFeatureError, match="Unsupported op GELU"):
            build_model(buf)

    def test_codes_resolved_per_operator(self):
        """Test two operators sharing one operator code entry."""
        buf = make_model(
            tensors=[
                {"name": "a", "shape": [2]},
                {"name": "p", "shape": [1, 2], "buffer": 1},
                {"name": "b", "shape": [4]},
                {"name": "c", "shape": [6]},
            ],
            operators=[
                {"opcode_index": 0, "inputs": [0, 1], "outputs": [2]},
                {"opcode_index": 0, "inputs": [2, 1], "outputs": [3]},
            ],
            operator_codes=[BuiltinOperator.PAD],
            buffers=[None, bytes(8)],
            inputs=[0],
            outputs=[3],
        )
        model = build_model(buf)
        first, second = model.ops
        assert first.padding is second.padding
        assert first.output is second.input


class TestModelMetadata:
    """Test model level fields."""

    def test_description_and_version(self, parsed_conv2d):
        """Test description and schema version are copied."""
        assert parsed_conv2d.description == "synthetic"
        assert parsed_conv2d.version == 3

    def test_tensors_without_operators(self):
        """Test a graph with tensors and no operators."""
        buf = SyntheticTFLiteModels.create_tensor_model([{"name": "x", "shape": [1]}])
        model = build_model(buf)
        assert len(model.tensors) == 1
        assert model.ops == []

    def test_model_independent_of_buffer(self, conv2d_model):
        """Test the model stays valid after the source buffer is gone."""
        data = bytearray(conv2d_model)
        model = build_model(data)
        expected = model.tensors[1].to_numpy().copy()
        data[:] = bytes(len(data))
        del data
        assert (model.tensors[1].to_numpy() == expected).all()
        assert model.tensors[0].name == "input"
