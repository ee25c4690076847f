from dataclasses import dataclass
from typing import Any, Dict, Literal, assert_never

import casm.registers as regs


type JSON = Dict[str, Any]


@dataclass(frozen=True)
class CellRef:
    register: regs.Register
    offset: int

    def __str__(self) -> str:
        return f'[{self.register} + {self.offset}]'

    def json(self) -> JSON:
        return {
            'Class': 'CellRef',
            'Register': self.register,
            'Offset': self.offset
        }


@dataclass(frozen=True)
class Immediate:
    value: int

    def __str__(self) -> str:
        return str(self.value)

    def json(self) -> JSON:
        return {'Class': 'Immediate', 'Value': self.value}


@dataclass(frozen=True)
class DoubleDeref:
    cell: CellRef
    offset: int

    def __str__(self) -> str:
        return f'[{self.cell} + {self.offset}]'

    def json(self) -> JSON:
        return {
            'Class': 'DoubleDeref',
            'Cell': self.cell.json(),
            'Offset': self.offset
        }


Operation = Literal['+', '*']
ADD: Operation = '+'
MUL: Operation = '*'
OPERATIONS = [ADD, MUL]


type DerefOrImmediate = CellRef | Immediate


@dataclass(frozen=True)
class BinOpOperand:
    op: Operation
    a: DerefOrImmediate
    b: DerefOrImmediate

    def __str__(self) -> str:
        return f'{self.a} {self.op} {self.b}'

    def json(self) -> JSON:
        return {
            'Class': 'BinOpOperand',
            'Op': self.op,
            'A': self.a.json(),
            'B': self.b.json()
        }


type ResOperand = CellRef | DoubleDeref | Immediate | BinOpOperand


def deref(register: regs.Register, offset: int = 0) -> CellRef:
    return CellRef(register, offset)


def imm(value: int) -> Immediate:
    return Immediate(value)


def deref_or_immediate_size(operand: DerefOrImmediate) -> int:
    ''' One word for a cell reference, two for an opcode plus inline constant '''

    match operand:
        case CellRef():
            return 1
        case Immediate():
            return 2
        case _:
            assert_never(operand)


def res_operand_size(operand: ResOperand) -> int:
    '''
    Size contribution of a result operand.

    A binary operation is sized by its right-hand side only: `[ap + 0] + 5`
    and `7 + 5` both take two words while `7 + [ap + 0]` takes one.
    '''

    match operand:
        case CellRef() | DoubleDeref():
            return 1
        case Immediate():
            return 2
        case BinOpOperand(b=b):
            return deref_or_immediate_size(b)
        case _:
            assert_never(operand)
