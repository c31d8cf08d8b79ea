"""
Intcode VM: Program Image Loading

Program images are a single line of comma-separated base-10 signed
integers, e.g. ``1,9,10,3,2,3,11,0,99,30,40,50``. Whitespace around the
whole string is stripped before splitting; whitespace around a field is
tolerated.
"""

from pathlib import Path
from typing import List, Union


class ProgramFormatError(ValueError):
    """Raised when program text is not a comma-separated integer list."""
    def __init__(self, message: str, field: int = -1):
        self.field = field
        super().__init__(f"Field {field}: {message}" if field >= 0 else message)


def parse_program(text: str) -> List[int]:
    """Parse program text into a list of cell values."""
    text = text.strip()
    if not text:
        raise ProgramFormatError("Empty program")
    image = []
    for i, field in enumerate(text.split(',')):
        field = field.strip()
        if not field:
            raise ProgramFormatError("empty field", i)
        try:
            image.append(int(field, 10))
        except ValueError:
            raise ProgramFormatError(f"not an integer: {field!r}", i) from None
    return image


def load_program(path: Union[str, Path]) -> List[int]:
    """Read and parse a program file."""
    return parse_program(Path(path).read_text(encoding='utf-8'))


def format_program(image) -> str:
    """Render a memory image back to program text."""
    return ','.join(str(v) for v in image)
