import pytest

import casm.operands as o
import casm.hints as h
import casm.instructions as ins


CELL = o.deref('fp', -3)
VALUE = o.imm(17)

RES_OPERANDS = [
    (o.deref('ap', 1), 1),
    (o.DoubleDeref(o.deref('ap', 1), 2), 1),
    (o.imm(5), 2),
    (o.BinOpOperand(o.ADD, CELL, VALUE), 2),
    (o.BinOpOperand(o.ADD, VALUE, VALUE), 2),
    (o.BinOpOperand(o.MUL, VALUE, CELL), 1),
    (o.BinOpOperand(o.MUL, CELL, CELL), 1),
]


@pytest.mark.parametrize('operand, size', RES_OPERANDS)
def test_add_ap_size(operand, size):
    assert ins.op_size(ins.AddApInstruction(operand)) == size


@pytest.mark.parametrize('operand, size', RES_OPERANDS)
def test_assert_eq_size(operand, size):
    assert ins.op_size(ins.AssertEqInstruction(CELL, operand)) == size
    assert ins.op_size(ins.QM31AssertEqInstruction(CELL, operand)) == size


@pytest.mark.parametrize('relative', [True, False])
def test_call_size(relative):
    assert ins.op_size(ins.CallInstruction(o.imm(17), relative)) == 2
    assert ins.op_size(ins.CallInstruction(o.deref('fp', -1), relative)) == 1


@pytest.mark.parametrize('relative', [True, False])
def test_jump_size(relative):
    assert ins.op_size(ins.JumpInstruction(o.imm(-4), relative)) == 2
    assert ins.op_size(ins.JumpInstruction(o.deref('ap', 0), relative)) == 1


def test_jnz_size_ignores_condition():
    assert ins.op_size(ins.JnzInstruction(o.imm(10), o.deref('ap', -1))) == 2
    assert ins.op_size(ins.JnzInstruction(o.imm(10), o.deref('fp', 7))) == 2
    assert ins.op_size(ins.JnzInstruction(o.deref('fp', 2), o.deref('ap', -1))) == 1


def test_ret_size():
    assert ins.op_size(ins.RetInstruction()) == 1


@pytest.mark.parametrize('finalize', [True, False])
def test_blake2s_size(finalize):
    body = ins.Blake2sCompressInstruction(
        state=o.deref('fp', -5),
        byte_count=o.deref('ap', 3),
        message=o.deref('fp', 100),
        finalize=finalize
    )

    assert ins.op_size(body) == 1


def test_instruction_size_ignores_flag_and_hints():
    body = ins.AssertEqInstruction(o.deref('ap', 0), o.imm(1))
    hinted = ins.Instruction(body, True, [h.CodeHint('x = 1'), h.AllocSegment(o.deref('ap', 0))])

    assert ins.Instruction.new(body, False).op_size() == 2
    assert hinted.op_size() == 2
