"""
Diagnostic runs: feed a single system ID, collect output.

Diagnostic programs emit one status code per self-test (0 = pass)
followed by a final diagnostic code.
"""

import logging
from typing import List, Sequence, Tuple

from ..decoder import IntcodeError
from ..machine import IntcodeMachine

log = logging.getLogger(__name__)


def run_program(image: Sequence[int], inputs: Sequence[int] = ()) -> Tuple[List[int], List[int]]:
    """Run to halt with `inputs`; return (output, final memory)."""
    vm = IntcodeMachine(image)
    vm.run_with_inputs(inputs)
    return vm.output, vm.memory


def run_diagnostic(image: Sequence[int], system_id: int) -> int:
    """Run a diagnostic program and return its final code.

    Raises IntcodeError if the program produced nothing or a self-test
    before the final code failed.
    """
    output, _ = run_program(image, [system_id])
    if not output:
        raise IntcodeError("Diagnostic produced no output")
    failed = [i for i, code in enumerate(output[:-1]) if code != 0]
    if failed:
        raise IntcodeError(f"Diagnostic self-tests failed at positions {failed}")
    log.info("system %d diagnostic code %d", system_id, output[-1])
    return output[-1]
