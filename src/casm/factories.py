import logging as lg
from typing import Any, cast

import casm.registers as regs
import casm.operands as o
import casm.hints as h
import casm.instructions as ins
import casm.program as prog


def _get(data: o.JSON, key: str) -> Any:
    if not isinstance(data, dict):
        raise UserWarning(f'Expected an object, got {data!r}')

    if key not in data:
        raise UserWarning(f'Missing {key} in {data.get("Class", "object")}')

    return data[key]


def _int(data: o.JSON, key: str) -> int:
    value = _get(data, key)

    if isinstance(value, bool) or not isinstance(value, int):
        raise UserWarning(f'{key} must be an integer, got {value!r}')

    return value


def _bool(data: o.JSON, key: str) -> bool:
    value = _get(data, key)

    if not isinstance(value, bool):
        raise UserWarning(f'{key} must be a boolean, got {value!r}')

    return value


def create_cell_ref(data: o.JSON) -> o.CellRef:
    if _get(data, 'Class') != 'CellRef':
        raise UserWarning(f'Expected a cell reference, got {data["Class"]}')

    register = _get(data, 'Register')

    if not regs.is_register(register):
        raise UserWarning(f'Unknown register {register}')

    return o.CellRef(cast(regs.Register, register), _int(data, 'Offset'))


def create_deref_or_immediate(data: o.JSON) -> o.DerefOrImmediate:
    match _get(data, 'Class'):
        case 'CellRef':
            return create_cell_ref(data)
        case 'Immediate':
            return o.Immediate(_int(data, 'Value'))
        case other:
            raise UserWarning(f'Expected a cell reference or immediate, got {other}')


def create_operand(data: o.JSON) -> o.ResOperand:
    match _get(data, 'Class'):
        case 'CellRef' | 'Immediate':
            return create_deref_or_immediate(data)
        case 'DoubleDeref':
            return o.DoubleDeref(create_cell_ref(_get(data, 'Cell')), _int(data, 'Offset'))
        case 'BinOpOperand':
            op = _get(data, 'Op')

            if op not in o.OPERATIONS:
                raise UserWarning(f'Unsupported operation {op}')

            return o.BinOpOperand(
                cast(o.Operation, op),
                create_deref_or_immediate(_get(data, 'A')),
                create_deref_or_immediate(_get(data, 'B'))
            )
        case other:
            raise UserWarning(f'Unsupported operand {other}')


def create_hint(data: o.JSON) -> h.Hint:
    def operand(key: str):
        return create_operand(_get(data, key))

    def cell(key: str):
        return create_cell_ref(_get(data, key))

    match _get(data, 'Class'):
        case 'CodeHint':
            code = _get(data, 'Code')

            if not isinstance(code, str):
                raise UserWarning(f'Hint code must be a string, got {code!r}')

            return h.CodeHint(code)
        case 'AllocSegment':
            return h.AllocSegment(cell('Dst'))
        case 'TestLessThan':
            return h.TestLessThan(operand('Lhs'), operand('Rhs'), cell('Dst'))
        case 'TestLessThanOrEqual':
            return h.TestLessThanOrEqual(operand('Lhs'), operand('Rhs'), cell('Dst'))
        case 'DivMod':
            return h.DivMod(
                operand('Lhs'), operand('Rhs'),
                cell('Quotient'), cell('Remainder')
            )
        case 'SquareRoot':
            return h.SquareRoot(operand('Value'), cell('Dst'))
        case 'AllocConstantSize':
            return h.AllocConstantSize(operand('Size'), cell('Dst'))
        case 'DebugPrint':
            return h.DebugPrint(operand('Start'), operand('End'))
        case other:
            raise UserWarning(f'Unsupported hint {other}')


def create_body(data: o.JSON) -> ins.InstructionBody:
    def cell(key: str):
        return create_cell_ref(_get(data, key))

    match _get(data, 'Class'):
        case 'AddAp':
            return ins.AddApInstruction(create_operand(_get(data, 'Operand')))
        case 'AssertEq':
            return ins.AssertEqInstruction(cell('A'), create_operand(_get(data, 'B')))
        case 'QM31AssertEq':
            return ins.QM31AssertEqInstruction(cell('A'), create_operand(_get(data, 'B')))
        case 'Call':
            target = create_deref_or_immediate(_get(data, 'Target'))
            return ins.CallInstruction(target, _bool(data, 'Relative'))
        case 'Jump':
            target = create_deref_or_immediate(_get(data, 'Target'))
            return ins.JumpInstruction(target, _bool(data, 'Relative'))
        case 'Jnz':
            jump_offset = create_deref_or_immediate(_get(data, 'JumpOffset'))
            return ins.JnzInstruction(jump_offset, cell('Condition'))
        case 'Ret':
            return ins.RetInstruction()
        case 'Blake2sCompress':
            return ins.Blake2sCompressInstruction(
                state=cell('State'),
                byte_count=cell('ByteCount'),
                message=cell('Message'),
                finalize=_bool(data, 'Finalize')
            )
        case other:
            raise UserWarning(f'Unsupported instruction {other}')


def create_instruction(data: o.JSON) -> ins.Instruction:
    if _get(data, 'Class') != 'Instruction':
        raise UserWarning(f'Expected an instruction, got {data["Class"]}')

    hints = data.get('Hints', [])

    if not isinstance(hints, list):
        raise UserWarning(f'Hints must be a list, got {hints!r}')

    body = create_body(_get(data, 'Body'))
    inc_ap = _bool(data, 'IncAp') if 'IncAp' in data else False
    lg.debug(f'Created instruction {body} with {len(hints)} hint(s)')
    return ins.Instruction(body, inc_ap, [create_hint(hint) for hint in hints])


def create_program(data: Any) -> prog.CasmProgram:
    # A bare list of instructions is accepted as well
    if isinstance(data, list):
        instructions = data
    else:
        if _get(data, 'Class') != 'CasmProgram':
            raise UserWarning(f'Expected a program, got {data["Class"]}')

        instructions = _get(data, 'Instructions')

        if not isinstance(instructions, list):
            raise UserWarning('Instructions must be a list')

    return prog.CasmProgram([create_instruction(item) for item in instructions])
