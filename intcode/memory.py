"""
Intcode VM: Extensible Memory

The program image is held as a dense list; every address at or beyond the
image length is backed by a sparse overflow dict. The two stores never
overlap, so a given address has exactly one authoritative cell.

    0 ............ len(image)-1 | len(image) ........... ∞
    └──── dense list ──────────┘ └──── overflow dict ───┘

Reads of addresses that were never written return 0.
"""

from typing import Dict, Iterable, List, Optional

from .decoder import IntcodeError


class Memory:
    """Unbounded signed-integer memory with a dense prefix."""

    def __init__(self, image: Iterable[int] = ()):
        self._mem: List[int] = list(image)
        self._overflow: Dict[int, int] = {}

    # --- Core read/write ---

    def read(self, addr: int, pc: Optional[int] = None) -> int:
        if addr < 0:
            raise IntcodeError(f"Read from negative address {addr}", pc=pc)
        if addr < len(self._mem):
            return self._mem[addr]
        return self._overflow.get(addr, 0)

    def write(self, addr: int, value: int, pc: Optional[int] = None):
        if addr < 0:
            raise IntcodeError(f"Write to negative address {addr}", pc=pc)
        if addr < len(self._mem):
            self._mem[addr] = value
        else:
            self._overflow[addr] = value

    # --- Container protocol (dense image only) ---

    def __len__(self) -> int:
        return len(self._mem)

    def __getitem__(self, addr: int) -> int:
        return self.read(addr)

    def __setitem__(self, addr: int, value: int):
        self.write(addr, value)

    def __eq__(self, other) -> bool:
        if isinstance(other, Memory):
            return self._mem == other._mem and self._overflow == other._overflow
        if isinstance(other, (list, tuple)):
            return self._mem == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Memory({len(self._mem)} cells, {len(self._overflow)} overflow)"

    # --- Inspection ---

    @property
    def overflow(self) -> Dict[int, int]:
        """Copy of the sparse store beyond the image."""
        return dict(self._overflow)

    def snapshot(self) -> List[int]:
        """Copy of the dense image."""
        return list(self._mem)

    def dump(self, start: int = 0, length: int = 64, per_line: int = 8) -> str:
        """Produce a text dump of memory for debugging."""
        lines = []
        for offset in range(0, length, per_line):
            addr = start + offset
            cells = ' '.join(f'{self.read(addr + i):>8}'
                             for i in range(min(per_line, length - offset)))
            lines.append(f'{addr:06d}  {cells}')
        return '\n'.join(lines)
