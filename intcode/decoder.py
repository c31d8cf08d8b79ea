"""
Intcode VM: Opcode Table + Instruction Decoder

Maps opcode numbers to (mnemonic, width) and splits an instruction cell
into its opcode and per-operand addressing modes.

Instruction cell layout (decimal digits):
    ...  E   D   C   BA
         │   │   │   └── opcode (value % 100)
         │   │   └────── mode of operand 1
         │   └────────── mode of operand 2
         └────────────── mode of operand 3

Addressing modes:
    POSITION   (0)  operand is an address
    IMMEDIATE  (1)  operand is the value itself (loads only)
    RELATIVE   (2)  operand + relative base is an address

Width is the number of cells the instruction occupies, opcode included.
"""

from enum import IntEnum
from typing import NamedTuple, Optional, Tuple


class IntcodeError(Exception):
    """Raised on any illegal machine state.

    Covers malformed programs (unknown opcode, unknown mode, immediate-mode
    store target) and protocol misuse (resume while not paused at an input
    instruction, resume after halt). Always fatal to the machine instance.
    """
    def __init__(self, message: str, pc: Optional[int] = None,
                 opcode: Optional[int] = None, mode: Optional[int] = None):
        self.message = message
        self.pc = pc
        self.opcode = opcode
        self.mode = mode
        super().__init__(f"{message} at PC {pc}" if pc is not None else message)


class Mode(IntEnum):
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2


# ──────────────────────────────────────────────
# Opcode constants
# ──────────────────────────────────────────────

OP_ADD = 1
OP_MUL = 2
OP_IN = 3
OP_OUT = 4
OP_JNZ = 5
OP_JZ = 6
OP_LT = 7
OP_EQ = 8
OP_ARB = 9
OP_HALT = 99


# Format: opcode -> (mnemonic, width)
OPCODES = {
    OP_ADD:  ('ADD',  4),
    OP_MUL:  ('MUL',  4),
    OP_IN:   ('IN',   2),
    OP_OUT:  ('OUT',  2),
    OP_JNZ:  ('JNZ',  3),   # jump-if-true
    OP_JZ:   ('JZ',   3),   # jump-if-false
    OP_LT:   ('LT',   4),
    OP_EQ:   ('EQ',   4),
    OP_ARB:  ('ARB',  2),   # adjust relative base
    OP_HALT: ('HALT', 1),
}


class Decoded(NamedTuple):
    """One decoded instruction cell."""
    opcode: int
    mnemonic: str
    width: int
    modes: Tuple[int, int, int]   # raw mode digits, validated on use


def split_modes(value: int) -> Tuple[int, int, int]:
    """Extract the three mode digits from an instruction cell."""
    return (value // 100 % 10, value // 1000 % 10, value // 10000 % 10)


def decode(value: int, pc: int) -> Decoded:
    """Decode the instruction cell `value` found at `pc`.

    Mode digits are returned raw; an unsupported digit only faults when the
    operand using it is resolved.
    """
    if value < 0:
        # Python's % would fold -1 into 99 (HALT)
        raise IntcodeError(f"Illegal opcode {value}", pc=pc, opcode=value)
    opcode = value % 100
    if opcode not in OPCODES:
        raise IntcodeError(f"Illegal opcode {opcode}", pc=pc, opcode=opcode)
    mnem, width = OPCODES[opcode]
    return Decoded(opcode, mnem, width, split_modes(value))


def check_mode(mode: int, pc: int, store: bool = False) -> Mode:
    """Validate a mode digit, returning it as a Mode.

    Immediate mode is rejected for store targets.
    """
    try:
        resolved = Mode(mode)
    except ValueError:
        kind = "store" if store else "load"
        raise IntcodeError(f"Illegal {kind} mode {mode}", pc=pc, mode=mode) from None
    if store and resolved is Mode.IMMEDIATE:
        raise IntcodeError(f"Illegal store mode {mode}", pc=pc, mode=mode)
    return resolved
