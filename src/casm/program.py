import logging as lg
from typing import List, Sequence

import casm.operands as o
import casm.instructions as ins


class ListingSettings:
    show_offsets: bool
    show_sizes: bool
    verbose: bool

    def __init__(self):
        self.show_offsets = False
        self.show_sizes = False
        self.verbose = False

    def update(
        self,
        show_offsets: bool | None = None,
        show_sizes: bool | None = None,
        verbose: bool | None = None
    ):
        if show_offsets is not None:
            self.show_offsets = show_offsets

        if show_sizes is not None:
            self.show_sizes = show_sizes

        if verbose is not None:
            self.verbose = verbose

        return self


class CasmProgram:
    instructions: List[ins.Instruction]

    def __init__(self, instructions: Sequence[ins.Instruction] = ()):
        self.instructions = list(instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CasmProgram):
            return NotImplemented

        return self.instructions == other.instructions

    def __len__(self) -> int:
        return len(self.instructions)

    def append(self, instruction: ins.Instruction):
        self.instructions.append(instruction)
        return self

    def op_size(self) -> int:
        return sum(instruction.op_size() for instruction in self.instructions)

    def offsets(self) -> List[int]:
        offsets = []
        offset = 0

        for instruction in self.instructions:
            lg.debug(f'Instruction at {offset}: {instruction.body}')
            offsets.append(offset)
            offset += instruction.op_size()

        return offsets

    def emit(self, settings: ListingSettings | None = None) -> Sequence[str]:
        if settings is None:
            settings = ListingSettings()

        width = max(4, len(str(self.op_size())))
        lines = []

        for offset, instruction in zip(self.offsets(), self.instructions):
            *hint_lines, body_line = str(instruction).split('\n')

            if settings.show_sizes:
                body_line = f'{body_line}  // size {instruction.op_size()}'

            if settings.show_offsets:
                lines.extend(f'{" " * width}  {line}' if line else '' for line in hint_lines)
                lines.append(f'{offset:0{width}}: {body_line}')
            else:
                lines.extend(hint_lines)
                lines.append(body_line)

        return lines

    def __str__(self) -> str:
        return '\n'.join(self.emit())

    def json(self) -> o.JSON:
        return {
            'Class': 'CasmProgram',
            'Instructions': [instruction.json() for instruction in self.instructions]
        }
