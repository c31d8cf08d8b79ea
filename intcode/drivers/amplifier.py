"""
Amplifier chains over independent Intcode machines.

Every amplifier runs its own copy of the same program. Each one is first
given its phase setting, then a signal; its output signal feeds the next
amplifier.

    seed ─> [A] ─> [B] ─> [C] ─> [D] ─> [E] ─> result         (chain)

    seed ─> [A] ─> [B] ─> [C] ─> [D] ─> [E] ─┐                 (feedback)
             ^                                │
             └────────────────────────────────┘

In feedback mode the loop keeps going round until the last amplifier
halts; the final signal is E's last output.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from itertools import permutations
from typing import List, Sequence, Tuple

from ..config import AMPLIFIER_SEED, DEFAULT_PHASES, FEEDBACK_PHASES
from ..decoder import IntcodeError
from ..machine import IntcodeMachine, State

log = logging.getLogger(__name__)


def _primed(image: Sequence[int], phase: int) -> IntcodeMachine:
    """Build a machine and hand it its phase setting."""
    amp = IntcodeMachine(image)
    if amp.run() is not State.AWAITING_INPUT:
        raise IntcodeError("Amplifier halted before reading its phase", pc=amp.pc)
    amp.resume(phase)
    return amp


def run_chain(image: Sequence[int], phases: Sequence[int],
              seed: int = AMPLIFIER_SEED) -> int:
    """Run one pass through the chain and return the last signal."""
    signal = seed
    for phase in phases:
        amp = _primed(image, phase)
        if amp.halted:
            raise IntcodeError("Amplifier halted before reading its signal", pc=amp.pc)
        amp.resume(signal)
        if not amp.output:
            raise IntcodeError("Program failed to produce output", pc=amp.pc)
        signal = amp.output[0]
    return signal


def run_feedback(image: Sequence[int], phases: Sequence[int],
                 seed: int = AMPLIFIER_SEED) -> int:
    """Cycle the signal around the loop until the amplifiers halt."""
    amps = [_primed(image, phase) for phase in phases]
    signal = seed
    rounds = 0
    halted = False
    while not halted:
        rounds += 1
        for amp in amps:
            if amp.resume(signal) is State.HALTED:
                halted = True
            if not amp.output:
                raise IntcodeError("Program failed to produce output", pc=amp.pc)
            signal = amp.output[-1]
    log.debug("feedback %s settled after %d rounds: %d", tuple(phases), rounds, signal)
    return signal


def _evaluate(image: Sequence[int], feedback: bool, phases: Tuple[int, ...]) -> Tuple[int, Tuple[int, ...]]:
    runner = run_feedback if feedback else run_chain
    return runner(image, phases), phases


def best_phases(image: Sequence[int], phase_values: Sequence[int] = None,
                feedback: bool = False, workers: int = 1) -> Tuple[int, List[int]]:
    """Try every ordering of `phase_values`; return (best signal, phases).

    With workers > 1 the orderings are evaluated in a process pool. Each
    evaluation builds its own machines, so nothing is shared.
    """
    if phase_values is None:
        phase_values = FEEDBACK_PHASES if feedback else DEFAULT_PHASES
    image = list(image)
    orderings = list(permutations(phase_values))
    evaluate = partial(_evaluate, image, feedback)

    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(evaluate, orderings, chunksize=8))
    else:
        results = [evaluate(order) for order in orderings]

    best_signal, best_order = max(results, key=lambda r: r[0])
    log.info("best of %d orderings: %d %s", len(orderings), best_signal, best_order)
    return best_signal, list(best_order)
