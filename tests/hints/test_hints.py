import pytest

import casm.operands as o
import casm.hints as h
import casm.instructions as ins


def test_as_integer():
    assert h.as_integer(o.deref('ap', 1)) == 'memory[ap + 1]'
    assert h.as_integer(o.DoubleDeref(o.deref('fp', -3), 2)) == 'memory[memory[fp + -3] + 2]'
    assert h.as_integer(o.imm(42)) == '42'
    assert h.as_integer(o.BinOpOperand(o.ADD, o.deref('ap', 0), o.imm(3))) == '(memory[ap + 0] + 3) % PRIME'
    assert h.as_integer(o.BinOpOperand(o.MUL, o.imm(2), o.deref('fp', 1))) == '(2 * memory[fp + 1]) % PRIME'


def test_single_line_hints():
    dst = o.deref('ap', 0)

    assert h.AllocSegment(dst).pythonic() == 'memory[ap + 0] = segments.add()'
    assert h.TestLessThan(o.deref('fp', -4), o.imm(7), dst).pythonic() == 'memory[ap + 0] = memory[fp + -4] < 7'
    assert h.TestLessThanOrEqual(o.imm(1), o.deref('fp', -4), dst).pythonic() == 'memory[ap + 0] = 1 <= memory[fp + -4]'

    divmod_hint = h.DivMod(o.deref('fp', -4), o.imm(10), o.deref('ap', 0), o.deref('ap', 1))
    assert divmod_hint.pythonic() == '(memory[ap + 0], memory[ap + 1]) = divmod(memory[fp + -4], 10)'


def test_square_root():
    hint = h.SquareRoot(o.deref('fp', -3), o.deref('ap', 5))
    assert hint.pythonic() == '\nimport math\nmemory[ap + 5] = math.isqrt(memory[fp + -3])\n'


def test_alloc_constant_size():
    hint = h.AllocConstantSize(o.imm(3), o.deref('ap', 0))

    assert hint.pythonic() == (
        '\n'
        "if '__boxed_segment' not in globals():\n"
        '    __boxed_segment = segments.add()\n'
        'memory[ap + 0] = __boxed_segment\n'
        '__boxed_segment += 3\n'
    )


def test_debug_print():
    hint = h.DebugPrint(o.deref('fp', -4), o.deref('fp', -3))

    assert hint.pythonic() == (
        '\n'
        'curr = memory[fp + -4]\n'
        'end = memory[fp + -3]\n'
        'while curr != end:\n'
        '    print(hex(memory[curr]))\n'
        '    curr += 1\n'
    )


def test_multi_line_hint_in_instruction():
    instruction = ins.Instruction(
        ins.AssertEqInstruction(o.deref('ap', 5), o.imm(0)),
        False,
        [h.SquareRoot(o.deref('fp', -3), o.deref('ap', 5))]
    )

    assert str(instruction) == (
        '%{\n'
        'import math\n'
        'memory[ap + 5] = math.isqrt(memory[fp + -3])\n'
        '%}\n'
        '[ap + 5] = 0'
    )


def test_hint_text():
    assert ins.hint_text(h.CodeHint('x = 1')) == '%{ x = 1 %}'
    assert ins.hint_text(h.CodeHint('\nx = 1\n')) == '%{\nx = 1\n%}'


def test_hint_equality():
    assert h.AllocSegment(o.deref('ap', 0)) == h.AllocSegment(o.CellRef('ap', 0))
    assert h.CodeHint('x = 1') != h.CodeHint('x = 2')
    assert h.TestLessThan(o.imm(1), o.imm(2), o.deref('ap', 0)) != h.TestLessThanOrEqual(o.imm(1), o.imm(2), o.deref('ap', 0))


def test_base_hint_is_abstract():
    with pytest.raises(NotImplementedError):
        h.Hint().pythonic()

    with pytest.raises(NotImplementedError):
        h.Hint().json()
