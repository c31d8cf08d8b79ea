"""
Gravity-assist style runs: patch the noun and verb cells, run to halt, and
read the result back from address 0.
"""

import logging
from typing import Optional, Sequence, Tuple

from ..config import (
    GRAVITY_TARGET, NOUN_ADDR, NOUN_VERB_RANGE, RESULT_ADDR, VERB_ADDR,
)
from ..decoder import IntcodeError
from ..machine import IntcodeMachine, State

log = logging.getLogger(__name__)


def run_with(image: Sequence[int], noun: int, verb: int) -> int:
    """Run a copy of `image` with its noun/verb patched; return memory[0]."""
    vm = IntcodeMachine(image)
    vm.mem[NOUN_ADDR] = noun
    vm.mem[VERB_ADDR] = verb
    if vm.run() is not State.HALTED:
        raise IntcodeError("Program requested input during a noun/verb run", pc=vm.pc)
    return vm.mem[RESULT_ADDR]


def find_noun_verb(image: Sequence[int], target: int = GRAVITY_TARGET,
                   values=NOUN_VERB_RANGE) -> Optional[Tuple[int, int]]:
    """Search noun/verb pairs for one producing `target`; None if absent."""
    for noun in values:
        for verb in values:
            if run_with(image, noun, verb) == target:
                log.info("noun=%d verb=%d produces %d", noun, verb, target)
                return noun, verb
    return None
