import json
from pathlib import Path

import casm.program as prog
import casm.factories as f


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


def load_program(filename: str) -> prog.CasmProgram:
    return f.create_program(json.loads(load_file(filename)))
