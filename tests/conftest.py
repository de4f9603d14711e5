"""
Shared test fixtures for the tminvert test suite.
"""

import sys
from pathlib import Path

import pytest

# Ensure project root is on the path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


SCENARIO_RULES = """\
# Overwrite the head with 0, then move right
a, 0 -> 0, b
a, 1 -> 0, b
b -> R, a
"""


@pytest.fixture
def blank_tape():
    """Empty tape with '_' as the default symbol."""
    from tape import Tape
    return Tape({}, "_", 0)


@pytest.fixture
def scenario_tape():
    """Tape 1,1,1,0,1,0 with the head at position 0."""
    from tape import Tape
    return Tape({0: "1", 1: "1", 2: "1", 3: "0", 4: "1", 5: "0"}, "_", 0)


@pytest.fixture
def scenario_spec():
    """Two read/write rules followed by a right-moving rule."""
    from direction import Direction
    from machine import MachineSpec, move, read_write
    return MachineSpec([
        read_write("a", "0", "0", "b"),
        read_write("a", "1", "0", "b"),
        move("b", Direction.RIGHT, "a"),
    ])


@pytest.fixture
def rules_file(tmp_path):
    """Rule table file for the scenario machine."""
    path = tmp_path / "rules.tm"
    path.write_text(SCENARIO_RULES)
    return path
