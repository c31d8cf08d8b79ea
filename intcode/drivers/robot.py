"""
Hull-painting robot driven by an Intcode "brain".

Each cycle the robot reports the colour of the panel under it (0 black,
1 white). The brain answers with two outputs: the colour to paint, then a
turn (0 left, 1 right). The robot paints, turns 90°, and moves forward one
panel. The loop ends when the brain halts.

Coordinates: x grows right, y grows down; the robot starts at (0, 0)
facing up.
"""

import logging
from typing import Dict, Sequence, Set, Tuple

from ..config import BLACK, HULL_GLYPHS, TURN_LEFT, TURN_RIGHT, WHITE
from ..decoder import IntcodeError
from ..machine import IntcodeMachine, State

log = logging.getLogger(__name__)

Point = Tuple[int, int]

# up, right, down, left
_HEADINGS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class HullRobot:
    """Drives one brain machine over an initially black hull."""

    def __init__(self, image: Sequence[int], start_color: int = BLACK):
        self.brain = IntcodeMachine(image)
        self.hull: Dict[Point, int] = {}
        self.painted: Set[Point] = set()
        self.position: Point = (0, 0)
        self.heading = 0
        if start_color != BLACK:
            self.hull[self.position] = start_color

    def camera(self) -> int:
        return self.hull.get(self.position, BLACK)

    def turn(self, direction: int):
        if direction == TURN_LEFT:
            self.heading = (self.heading + 3) % 4
        elif direction == TURN_RIGHT:
            self.heading = (self.heading + 1) % 4
        else:
            raise IntcodeError(f"Brain issued invalid turn {direction}", pc=self.brain.pc)
        dx, dy = _HEADINGS[self.heading]
        self.position = (self.position[0] + dx, self.position[1] + dy)

    def paint(self, color: int):
        if color not in (BLACK, WHITE):
            raise IntcodeError(f"Brain issued invalid colour {color}", pc=self.brain.pc)
        self.hull[self.position] = color
        self.painted.add(self.position)

    def run(self) -> int:
        """Run the brain to completion; return the number of panels painted."""
        state = self.brain.run()
        while state is State.AWAITING_INPUT:
            state = self.brain.resume(self.camera())
            out = self.brain.drain_output()
            if not out and state is State.HALTED:
                break
            if len(out) != 2:
                raise IntcodeError(f"Brain produced {len(out)} outputs, expected 2",
                                   pc=self.brain.pc)
            color, direction = out
            self.paint(color)
            self.turn(direction)
        log.info("robot halted after painting %d panels", len(self.painted))
        return len(self.painted)

    def render(self) -> str:
        """Draw the white panels' bounding box."""
        return render_hull(self.hull)


def render_hull(hull: Dict[Point, int]) -> str:
    whites = [p for p, c in hull.items() if c == WHITE]
    if not whites:
        return ""
    left = min(x for x, _ in whites)
    right = max(x for x, _ in whites)
    top = min(y for _, y in whites)
    bottom = max(y for _, y in whites)
    rows = []
    for y in range(top, bottom + 1):
        rows.append("".join(HULL_GLYPHS[hull.get((x, y), BLACK)]
                            for x in range(left, right + 1)))
    return "\n".join(rows)


def paint_hull(image: Sequence[int], start_color: int = BLACK) -> Tuple[int, str]:
    robot = HullRobot(image, start_color)
    painted = robot.run()
    return painted, robot.render()
