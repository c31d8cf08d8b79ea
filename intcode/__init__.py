"""
Intcode Virtual Machine
=======================
An interpreter for the Intcode instruction set: signed-integer memory,
three addressing modes, a relative base register and a cooperative
suspend-on-input protocol.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────────────┐    ┌──────────┐
    │ program  │───>│  Memory  │<──>│  IntcodeMachine  │───>│  output  │
    │ (text)   │    │ (dense + │    │ decode / resolve │    │  log     │
    └──────────┘    │ overflow)│    │ / execute        │    └──────────┘
                    └──────────┘    └──────────────────┘
                                            ^ resume(value)
                                            │
                                    drivers/ (amplifiers, robot, ...)

    - decoder.py:   opcode table, mode digits, IntcodeError
    - memory.py:    dense image + sparse overflow store
    - machine.py:   run / resume / step state machine
    - program.py:   comma-separated program text
    - disasm.py:    linear-sweep listing
    - drivers/:     callers that chain and feed machines
"""

__version__ = "0.3.0"

from .decoder import IntcodeError, Mode, OPCODES
from .memory import Memory
from .machine import IntcodeMachine, State
from .program import ProgramFormatError, parse_program, load_program, format_program
from .disasm import disassemble, listing
