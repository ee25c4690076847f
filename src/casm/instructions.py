from dataclasses import dataclass, field
from typing import Sequence, assert_never

import casm.operands as o
import casm.hints as h


@dataclass(frozen=True)
class AddApInstruction:
    ''' ap += operand '''

    operand: o.ResOperand

    def __str__(self):
        return body_text(self)

    def json(self) -> o.JSON:
        return {'Class': 'AddAp', 'Operand': self.operand.json()}


@dataclass(frozen=True)
class AssertEqInstruction:
    ''' a = b '''

    a: o.CellRef
    b: o.ResOperand

    def __str__(self):
        return body_text(self)

    def json(self) -> o.JSON:
        return {'Class': 'AssertEq', 'A': self.a.json(), 'B': self.b.json()}


@dataclass(frozen=True)
class QM31AssertEqInstruction:
    ''' a = b over the QM31 extension field '''

    a: o.CellRef
    b: o.ResOperand

    def __str__(self):
        return body_text(self)

    def json(self) -> o.JSON:
        return {'Class': 'QM31AssertEq', 'A': self.a.json(), 'B': self.b.json()}


@dataclass(frozen=True)
class CallInstruction:
    ''' call rel/abs target '''

    target: o.DerefOrImmediate
    relative: bool

    def __str__(self):
        return body_text(self)

    def json(self) -> o.JSON:
        return {
            'Class': 'Call',
            'Target': self.target.json(),
            'Relative': self.relative
        }


@dataclass(frozen=True)
class JumpInstruction:
    ''' jmp rel/abs target '''

    target: o.DerefOrImmediate
    relative: bool

    def __str__(self):
        return body_text(self)

    def json(self) -> o.JSON:
        return {
            'Class': 'Jump',
            'Target': self.target.json(),
            'Relative': self.relative
        }


@dataclass(frozen=True)
class JnzInstruction:
    ''' jmp rel jump_offset if condition != 0 '''

    jump_offset: o.DerefOrImmediate
    condition: o.CellRef

    def __str__(self):
        return body_text(self)

    def json(self) -> o.JSON:
        return {
            'Class': 'Jnz',
            'JumpOffset': self.jump_offset.json(),
            'Condition': self.condition.json()
        }


@dataclass(frozen=True)
class RetInstruction:
    def __str__(self):
        return body_text(self)

    def json(self) -> o.JSON:
        return {'Class': 'Ret'}


@dataclass(frozen=True)
class Blake2sCompressInstruction:
    ''' Blake2s compression of a message block, result written to [ap + 0] '''

    state: o.CellRef
    byte_count: o.CellRef
    message: o.CellRef
    finalize: bool

    def __str__(self):
        return body_text(self)

    def json(self) -> o.JSON:
        return {
            'Class': 'Blake2sCompress',
            'State': self.state.json(),
            'ByteCount': self.byte_count.json(),
            'Message': self.message.json(),
            'Finalize': self.finalize
        }


type InstructionBody = (
    AddApInstruction
    | AssertEqInstruction
    | QM31AssertEqInstruction
    | CallInstruction
    | JnzInstruction
    | JumpInstruction
    | RetInstruction
    | Blake2sCompressInstruction
)


def op_size(body: InstructionBody) -> int:
    ''' Number of memory words the instruction occupies '''

    match body:
        case AddApInstruction(operand=operand):
            return o.res_operand_size(operand)
        case AssertEqInstruction(b=b) | QM31AssertEqInstruction(b=b):
            return o.res_operand_size(b)
        case CallInstruction(target=target) | JumpInstruction(target=target):
            return o.deref_or_immediate_size(target)
        case JnzInstruction(jump_offset=jump_offset):
            return o.deref_or_immediate_size(jump_offset)
        case RetInstruction():
            return 1
        case Blake2sCompressInstruction():
            return 1
        case _:
            assert_never(body)


def _rel_or_abs(relative: bool) -> str:
    return 'rel' if relative else 'abs'


def body_text(body: InstructionBody) -> str:
    match body:
        case AddApInstruction(operand=operand):
            return f'ap += {operand}'
        case AssertEqInstruction(a=a, b=b):
            return f'{a} = {b}'
        case QM31AssertEqInstruction(a=a, b=b):
            return f'{{QM31}} {a} = {b}'
        case CallInstruction(target=target, relative=relative):
            return f'call {_rel_or_abs(relative)} {target}'
        case JumpInstruction(target=target, relative=relative):
            return f'jmp {_rel_or_abs(relative)} {target}'
        case JnzInstruction(jump_offset=jump_offset, condition=condition):
            return f'jmp rel {jump_offset} if {condition} != 0'
        case RetInstruction():
            return 'ret'
        case Blake2sCompressInstruction():
            finalize = 'true' if body.finalize else 'false'

            return (
                f'blake2s[state={body.state}, message={body.message}, '
                f'byte_count={body.byte_count}, finalize={finalize}] => [ap + 0]'
            )
        case _:
            assert_never(body)


def hint_text(hint: h.Hint) -> str:
    code = hint.pythonic()

    # Multi-line hints carry their own framing newlines
    if code.startswith('\n'):
        return f'%{{{code}%}}'

    return f'%{{ {code} %}}'


@dataclass(frozen=True)
class Instruction:
    ''' An instruction body with the ap++ flag and the hints that run before it '''

    body: InstructionBody
    inc_ap: bool = False
    hints: Sequence[h.Hint] = field(default_factory=tuple)

    def __post_init__(self):
        # Owned copy; list and tuple inputs compare the same afterwards
        object.__setattr__(self, 'hints', tuple(self.hints))

    @classmethod
    def new(cls, body: InstructionBody, inc_ap: bool) -> 'Instruction':
        return cls(body, inc_ap)

    def op_size(self) -> int:
        return op_size(self.body)

    def __str__(self) -> str:
        lines = [hint_text(hint) for hint in self.hints]
        suffix = ', ap++' if self.inc_ap else ''
        lines.append(f'{self.body}{suffix}')
        return '\n'.join(lines)

    def json(self) -> o.JSON:
        return {
            'Class': 'Instruction',
            'Body': self.body.json(),
            'IncAp': self.inc_ap,
            'Hints': [hint.json() for hint in self.hints]
        }
