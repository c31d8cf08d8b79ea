"""
Intcode VM: Main Machine Class

Integrates:
  - Opcode decoder (decoder.py)
  - Extensible memory (memory.py)
  - Program counter, relative base and output log

Execution model:
  1. Fetch instruction cell at PC
  2. Decode opcode + mode digits
  3. Resolve operands through the addressing-mode resolver
  4. Execute handler → update memory, PC, relative base, output
  5. Stop on input request or halt

States:
  READY           constructed, not yet run
  RUNNING         inside the execution loop (transient)
  AWAITING_INPUT  stopped on an input instruction that has not been consumed
  HALTED          opcode 99 reached (terminal)

    READY ──run()──> RUNNING ──IN──> AWAITING_INPUT ──resume(v)──> RUNNING
                        │                                             │
                        └──────────────HALT─────────> HALTED <────────┘

Usage:
    vm = IntcodeMachine([3, 0, 4, 0, 99])
    state = vm.run()          # State.AWAITING_INPUT
    state = vm.resume(7)      # State.HALTED
    vm.output                 # [7]
"""

import logging
from enum import Enum
from typing import Iterable, List

from .decoder import (
    decode, check_mode, IntcodeError, Mode,
    OP_ADD, OP_MUL, OP_IN, OP_OUT, OP_JNZ, OP_JZ, OP_LT, OP_EQ, OP_ARB, OP_HALT,
)
from .memory import Memory

log = logging.getLogger(__name__)


class State(Enum):
    READY = 'READY'
    RUNNING = 'RUNNING'
    AWAITING_INPUT = 'AWAITING_INPUT'
    HALTED = 'HALTED'


class IntcodeMachine:
    """Intcode interpreter with cooperative suspend-on-input.

    The machine owns its memory, PC, relative base and output log. Two
    machines built from the same image share nothing.
    """

    def __init__(self, image: Iterable[int]):
        self.mem = Memory(image)
        self.output: List[int] = []
        self.pc = 0
        self.rel_base = 0
        self.state = State.READY
        self.steps = 0

        self._trace = False
        self._trace_output: List[str] = []

        self._dispatch = self._build_dispatch()

    @property
    def memory(self) -> List[int]:
        """Current dense memory image (copy)."""
        return self.mem.snapshot()

    @property
    def halted(self) -> bool:
        return self.state is State.HALTED

    @property
    def awaiting_input(self) -> bool:
        return self.state is State.AWAITING_INPUT

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> State:
        """Execute one instruction. Returns the resulting state.

        An input instruction is not consumed; the machine moves to
        AWAITING_INPUT and the PC stays on it.
        """
        if self.state is State.HALTED:
            return self.state

        pc = self.pc
        inst = decode(self.mem.read(pc, pc), pc)

        # pending IN already traced
        if self._trace and self.state is not State.AWAITING_INPUT:
            self._record(pc, inst)

        if inst.opcode == OP_IN:
            self._set_state(State.AWAITING_INPUT)
            return self.state
        if inst.opcode == OP_HALT:
            self._set_state(State.HALTED)
            return self.state

        self._set_state(State.RUNNING)
        self._dispatch[inst.opcode](inst.modes)
        self.steps += 1
        return self.state

    def run(self) -> State:
        """Run until the program halts or requests input.

        Returns State.AWAITING_INPUT or State.HALTED. Safe to call again
        while paused; the pending input instruction is left in place.
        """
        while True:
            state = self.step()
            if state is not State.RUNNING:
                return state

    def resume(self, value: int) -> State:
        """Feed `value` to the pending input instruction and keep running."""
        if self.state is State.HALTED:
            raise IntcodeError("Cannot resume a halted machine", pc=self.pc)
        if self.state is not State.AWAITING_INPUT:
            raise IntcodeError("Expected input instruction when resuming", pc=self.pc)

        modes = decode(self.mem.read(self.pc, self.pc), self.pc).modes
        self._store(1, modes[0], value)
        log.debug("input %d consumed at PC %d", value, self.pc)
        self.pc += 2
        self._set_state(State.RUNNING)
        return self.run()

    def run_with_inputs(self, inputs: Iterable[int]) -> State:
        """Run to completion, answering each input request from `inputs`."""
        feed = iter(inputs)
        state = self.run()
        while state is State.AWAITING_INPUT:
            try:
                value = next(feed)
            except StopIteration:
                raise IntcodeError("Program requested more input than supplied",
                                   pc=self.pc) from None
            state = self.resume(value)
        return state

    def drain_output(self) -> List[int]:
        """Return all accumulated output and clear the log."""
        out, self.output = self.output, []
        return out

    def _set_state(self, state: State):
        if state is not self.state:
            log.debug("PC %d: %s -> %s", self.pc, self.state.value, state.value)
            self.state = state

    # ══════════════════════════════════════════════
    # Addressing-mode resolver
    # ══════════════════════════════════════════════

    def _load(self, n: int, mode: int) -> int:
        """Effective value of operand n (1-based) of the current instruction."""
        param = self.mem.read(self.pc + n, self.pc)
        resolved = check_mode(mode, self.pc)
        if resolved is Mode.IMMEDIATE:
            return param
        if resolved is Mode.RELATIVE:
            return self.mem.read(self.rel_base + param, self.pc)
        return self.mem.read(param, self.pc)

    def _store(self, n: int, mode: int, value: int):
        """Write `value` to the effective address of operand n."""
        param = self.mem.read(self.pc + n, self.pc)
        if check_mode(mode, self.pc, store=True) is Mode.RELATIVE:
            self.mem.write(self.rel_base + param, value, self.pc)
        else:
            self.mem.write(param, value, self.pc)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(modes). PC still points at the opcode.

    def _build_dispatch(self) -> dict:
        return {
            OP_ADD: self._op_add,
            OP_MUL: self._op_mul,
            OP_OUT: self._op_out,
            OP_JNZ: self._op_jnz,
            OP_JZ:  self._op_jz,
            OP_LT:  self._op_lt,
            OP_EQ:  self._op_eq,
            OP_ARB: self._op_arb,
        }

    def _op_add(self, modes):
        a = self._load(1, modes[0])
        b = self._load(2, modes[1])
        self._store(3, modes[2], a + b)
        self.pc += 4

    def _op_mul(self, modes):
        a = self._load(1, modes[0])
        b = self._load(2, modes[1])
        self._store(3, modes[2], a * b)
        self.pc += 4

    def _op_out(self, modes):
        value = self._load(1, modes[0])
        self.output.append(value)
        log.debug("output %d at PC %d", value, self.pc)
        self.pc += 2

    def _op_jnz(self, modes):
        if self._load(1, modes[0]) != 0:
            self.pc = self._load(2, modes[1])
        else:
            self.pc += 3

    def _op_jz(self, modes):
        if self._load(1, modes[0]) == 0:
            self.pc = self._load(2, modes[1])
        else:
            self.pc += 3

    def _op_lt(self, modes):
        a = self._load(1, modes[0])
        b = self._load(2, modes[1])
        self._store(3, modes[2], 1 if a < b else 0)
        self.pc += 4

    def _op_eq(self, modes):
        a = self._load(1, modes[0])
        b = self._load(2, modes[1])
        self._store(3, modes[2], 1 if a == b else 0)
        self.pc += 4

    def _op_arb(self, modes):
        self.rel_base += self._load(1, modes[0])
        self.pc += 2

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Enable per-instruction trace recording."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    @property
    def trace(self) -> List[str]:
        return list(self._trace_output)

    def _record(self, pc: int, inst):
        operands = ' '.join(str(self.mem.read(pc + i)) for i in range(1, inst.width))
        line = f"{pc:06d}: {inst.mnemonic:4s} {operands:<30s} RB={self.rel_base}"
        self._trace_output.append(line.rstrip())
        log.debug("%s", line.rstrip())

    def display(self) -> str:
        """Format machine registers for debugging."""
        return (f"PC={self.pc} RB={self.rel_base} STATE={self.state.value} "
                f"OUT={len(self.output)} STEPS={self.steps}")
