"""
Intcode VM: Driver Configuration
==================================

Defaults for the drivers and the CLI. CLI flags override profile values.
"""

# =============================================================================
#  AMPLIFIER CHAIN
# =============================================================================
DEFAULT_PHASES = (0, 1, 2, 3, 4)      # single-pass chain
FEEDBACK_PHASES = (5, 6, 7, 8, 9)     # feedback loop
AMPLIFIER_SEED = 0                    # first amplifier's signal input


# =============================================================================
#  GRAVITY ASSIST (noun / verb patching)
# =============================================================================
NOUN_ADDR = 1
VERB_ADDR = 2
RESULT_ADDR = 0
ALARM_NOUN = 12
ALARM_VERB = 2
GRAVITY_TARGET = 19690720
NOUN_VERB_RANGE = range(0, 100)       # inclusive 0..99


# =============================================================================
#  HULL PAINTING ROBOT
# =============================================================================
BLACK = 0
WHITE = 1
TURN_LEFT = 0
TURN_RIGHT = 1
HULL_GLYPHS = {BLACK: ".", WHITE: "#"}


# =============================================================================
#  RUN PROFILES: selected with ``icvm --profile``
# =============================================================================
RUN_PROFILES = {
    "default": {
        "description": "Quiet run, warnings only",
        "trace": False,
        "verbose": 0,
        "workers": 1,
    },
    "debug": {
        "description": "Instruction trace + DEBUG logging",
        "trace": True,
        "verbose": 2,
        "workers": 1,
    },
    "parallel": {
        "description": "Phase search across worker processes",
        "trace": False,
        "verbose": 0,
        "workers": 4,
    },
}
