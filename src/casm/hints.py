from dataclasses import dataclass
from textwrap import dedent
from typing import assert_never

import casm.operands as o


def as_integer(operand: o.ResOperand) -> str:
    match operand:
        case o.CellRef():
            return f'memory{operand}'
        case o.DoubleDeref(cell=cell, offset=offset):
            return f'memory[memory{cell} + {offset}]'
        case o.Immediate():
            return str(operand)
        case o.BinOpOperand(op=op, a=a, b=b):
            return f'({as_integer(a)} {op} {as_integer(b)}) % PRIME'
        case _:
            assert_never(operand)


def _multiline(code: str) -> str:
    # Multi-line hints are framed by newlines so the instruction renders them
    # without padding inside the braces
    return '\n' + dedent(code).strip('\n') + '\n'


class Hint:
    def pythonic(self) -> str:
        raise NotImplementedError()

    def json(self) -> o.JSON:
        raise NotImplementedError()


@dataclass(frozen=True)
class CodeHint(Hint):
    code: str

    def pythonic(self):
        return self.code

    def json(self):
        return {'Class': 'CodeHint', 'Code': self.code}


@dataclass(frozen=True)
class AllocSegment(Hint):
    dst: o.CellRef

    def pythonic(self):
        return f'memory{self.dst} = segments.add()'

    def json(self):
        return {'Class': 'AllocSegment', 'Dst': self.dst.json()}


@dataclass(frozen=True)
class TestLessThan(Hint):
    lhs: o.ResOperand
    rhs: o.ResOperand
    dst: o.CellRef

    def pythonic(self):
        return f'memory{self.dst} = {as_integer(self.lhs)} < {as_integer(self.rhs)}'

    def json(self):
        return {
            'Class': 'TestLessThan',
            'Lhs': self.lhs.json(),
            'Rhs': self.rhs.json(),
            'Dst': self.dst.json()
        }


@dataclass(frozen=True)
class TestLessThanOrEqual(Hint):
    lhs: o.ResOperand
    rhs: o.ResOperand
    dst: o.CellRef

    def pythonic(self):
        return f'memory{self.dst} = {as_integer(self.lhs)} <= {as_integer(self.rhs)}'

    def json(self):
        return {
            'Class': 'TestLessThanOrEqual',
            'Lhs': self.lhs.json(),
            'Rhs': self.rhs.json(),
            'Dst': self.dst.json()
        }


@dataclass(frozen=True)
class DivMod(Hint):
    lhs: o.ResOperand
    rhs: o.ResOperand
    quotient: o.CellRef
    remainder: o.CellRef

    def pythonic(self):
        lhs = as_integer(self.lhs)
        rhs = as_integer(self.rhs)
        return f'(memory{self.quotient}, memory{self.remainder}) = divmod({lhs}, {rhs})'

    def json(self):
        return {
            'Class': 'DivMod',
            'Lhs': self.lhs.json(),
            'Rhs': self.rhs.json(),
            'Quotient': self.quotient.json(),
            'Remainder': self.remainder.json()
        }


@dataclass(frozen=True)
class SquareRoot(Hint):
    value: o.ResOperand
    dst: o.CellRef

    def pythonic(self):
        return _multiline(f'''
            import math
            memory{self.dst} = math.isqrt({as_integer(self.value)})
        ''')

    def json(self):
        return {
            'Class': 'SquareRoot',
            'Value': self.value.json(),
            'Dst': self.dst.json()
        }


@dataclass(frozen=True)
class AllocConstantSize(Hint):
    size: o.ResOperand
    dst: o.CellRef

    def pythonic(self):
        return _multiline(f'''
            if '__boxed_segment' not in globals():
                __boxed_segment = segments.add()
            memory{self.dst} = __boxed_segment
            __boxed_segment += {as_integer(self.size)}
        ''')

    def json(self):
        return {
            'Class': 'AllocConstantSize',
            'Size': self.size.json(),
            'Dst': self.dst.json()
        }


@dataclass(frozen=True)
class DebugPrint(Hint):
    start: o.ResOperand
    end: o.ResOperand

    def pythonic(self):
        return _multiline(f'''
            curr = {as_integer(self.start)}
            end = {as_integer(self.end)}
            while curr != end:
                print(hex(memory[curr]))
                curr += 1
        ''')

    def json(self):
        return {
            'Class': 'DebugPrint',
            'Start': self.start.json(),
            'End': self.end.json()
        }
