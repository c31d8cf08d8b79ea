"""
Intcode Disassembler
====================
Static linear-sweep listing of an Intcode memory image.

Intcode freely mixes code and data, so a linear sweep is only a guide:
any cell that does not decode to a known opcode (or carries an unknown
mode digit) is emitted as a ``DATA`` line and the sweep moves on by one.

API Usage:
    from intcode.disasm import disassemble

    for inst in disassemble([1002, 4, 3, 4, 33]):
        print(inst.format())    # "000000: 1002 4 3 4       MUL  [4], #3, [4]"
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .decoder import OPCODES, Mode, split_modes


# Operand display per mode
_MODE_FMT = {
    Mode.POSITION:  "[{}]",
    Mode.IMMEDIATE: "#{}",
    Mode.RELATIVE:  "[rb{:+d}]",
}


@dataclass
class DisassembledInstruction:
    """One decoded instruction with all formatting data."""
    address: int
    cells: List[int]        # opcode cell + operand cells
    mnemonic: str
    operand_str: str

    @property
    def length(self) -> int:
        return len(self.cells)

    @property
    def raw_str(self) -> str:
        return " ".join(str(c) for c in self.cells)

    def format(self, raw_width: int = 16) -> str:
        """Format as a single listing line."""
        asm = f"{self.mnemonic:4s} {self.operand_str}".rstrip()
        return f"{self.address:06d}: {self.raw_str.ljust(raw_width)} {asm}"


def _decode_at(image: Sequence[int], addr: int) -> Optional[DisassembledInstruction]:
    value = image[addr]
    if value < 0 or value % 100 not in OPCODES:
        return None
    mnem, width = OPCODES[value % 100]
    if addr + width > len(image):
        return None
    modes = split_modes(value)
    operands = []
    for i in range(width - 1):
        try:
            fmt = _MODE_FMT[Mode(modes[i])]
        except ValueError:
            return None
        operands.append(fmt.format(image[addr + 1 + i]))
    return DisassembledInstruction(addr, list(image[addr:addr + width]),
                                   mnem, ", ".join(operands))


def disassemble(image: Sequence[int], start: int = 0,
                count: Optional[int] = None) -> List[DisassembledInstruction]:
    """Disassemble `image` from `start`, returning at most `count` lines."""
    results = []
    addr = start
    while addr < len(image) and (count is None or len(results) < count):
        inst = _decode_at(image, addr)
        if inst is None:
            inst = DisassembledInstruction(addr, [image[addr]], "DATA", str(image[addr]))
        results.append(inst)
        addr += inst.length
    return results


def listing(image: Sequence[int], start: int = 0, count: Optional[int] = None) -> str:
    return "\n".join(inst.format() for inst in disassemble(image, start, count))
