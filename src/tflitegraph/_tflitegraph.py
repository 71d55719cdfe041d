__docformat__ = "restructuredtext"
__all__ = ["TFLiteGraph"]

from pathlib import Path

from tflitegraph.ir import Model


class TFLiteGraph:
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def parse(self, buf: bytes | bytearray) -> Model:
        """Parse TFLite model bytes into a computation graph.

        :param buf: Complete model bytes
        :return: Parsed model, owned by the caller
        """
        # Stage 1: Check bytes and build graph
        from tflitegraph.load import load_tflite_model

        model = load_tflite_model(buf)

        # Stage 2: Check tensor references
        model.validate()

        if self.verbose:
            print(f"Parsed {len(model.tensors)} tensors, {len(model.ops)} operators")
            for i, op in enumerate(model.ops):
                print(f"  [{i}] {op.op_type} -> {op.output.name}")

        return model

    def parse_file(self, tflite_path: str | Path) -> Model:
        """Read a .tflite file and parse it.

        :param tflite_path: Path to the model file
        :return: Parsed model
        """
        from tflitegraph.load import read_tflite_bytes

        buf = read_tflite_bytes(tflite_path)
        if self.verbose:
            print(f"Loaded: {tflite_path} ({len(buf)} bytes)")
        return self.parse(buf)
