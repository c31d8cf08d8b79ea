"""
Intcode VM: Memory Map + Decoder Tests
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from intcode import IntcodeError, Memory, Mode
from intcode.decoder import decode, check_mode, split_modes, OPCODES


class TestMemory:

    def test_dense_read_write(self):
        mem = Memory([1, 2, 3])
        mem.write(1, 42)
        assert mem.read(1) == 42
        assert mem[1] == 42
        assert mem.overflow == {}

    def test_overflow_default_zero(self):
        mem = Memory([1, 2, 3])
        assert mem.read(3) == 0
        assert mem.read(10 ** 12) == 0

    def test_overflow_write_does_not_grow_image(self):
        mem = Memory([1, 2, 3])
        mem[500] = 9
        assert len(mem) == 3
        assert mem[500] == 9
        assert mem.overflow == {500: 9}
        assert mem.snapshot() == [1, 2, 3]

    def test_image_is_copied(self):
        image = [1, 2, 3]
        mem = Memory(image)
        mem[0] = 99
        assert image == [1, 2, 3]

    def test_negative_address(self):
        mem = Memory([0])
        with pytest.raises(IntcodeError, match="negative"):
            mem.read(-1)
        with pytest.raises(IntcodeError, match="negative"):
            mem.write(-5, 1)

    def test_equality(self):
        assert Memory([1, 2]) == [1, 2]
        assert Memory([1, 2]) == Memory([1, 2])
        a = Memory([1, 2])
        a[10] = 1
        assert a != Memory([1, 2])

    def test_dump(self):
        mem = Memory([1, 2, 3])
        text = mem.dump(0, 16)
        lines = text.split("\n")
        assert len(lines) == 2
        assert lines[0].startswith("000000")
        assert lines[1].startswith("000008")


class TestDecoder:

    def test_table_widths(self):
        widths = {mnem: width for mnem, width in OPCODES.values()}
        assert widths == {'ADD': 4, 'MUL': 4, 'IN': 2, 'OUT': 2, 'JNZ': 3,
                          'JZ': 3, 'LT': 4, 'EQ': 4, 'ARB': 2, 'HALT': 1}

    def test_split_modes(self):
        assert split_modes(1002) == (0, 1, 0)
        assert split_modes(21101) == (1, 1, 2)
        assert split_modes(99) == (0, 0, 0)

    def test_decode(self):
        inst = decode(1002, 7)
        assert inst.opcode == 2
        assert inst.mnemonic == 'MUL'
        assert inst.width == 4
        assert inst.modes == (0, 1, 0)

    def test_decode_unknown(self):
        with pytest.raises(IntcodeError) as exc:
            decode(1010, 3)
        assert exc.value.opcode == 10
        assert exc.value.pc == 3

    def test_check_mode(self):
        assert check_mode(0, 0) is Mode.POSITION
        assert check_mode(1, 0) is Mode.IMMEDIATE
        assert check_mode(2, 0, store=True) is Mode.RELATIVE
        with pytest.raises(IntcodeError, match="Illegal store mode 1"):
            check_mode(1, 0, store=True)
        with pytest.raises(IntcodeError, match="Illegal load mode 7 at PC 12"):
            check_mode(7, 12)
