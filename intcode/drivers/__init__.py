"""Programs that drive Intcode machines: amplifier chains, the hull robot,
noun/verb search and diagnostic runs."""

from .amplifier import run_chain, run_feedback, best_phases
from .robot import HullRobot, paint_hull, render_hull
from .gravity import run_with, find_noun_verb
from .diagnostic import run_program, run_diagnostic
