"""
Tests for Direction: offsets, opposite(), parse(), and text tokens.
"""

import pytest

from direction import Direction


class TestDirectionOffsets:
    def test_values_are_unit_offsets(self):
        assert Direction.LEFT == -1
        assert Direction.CENTER == 0
        assert Direction.RIGHT == 1

    def test_usable_as_offset(self):
        assert 5 + Direction.LEFT == 4
        assert 5 + Direction.RIGHT == 6


class TestDirectionOpposite:
    @pytest.mark.parametrize("direction,expected", [
        (Direction.LEFT, Direction.RIGHT),
        (Direction.CENTER, Direction.CENTER),
        (Direction.RIGHT, Direction.LEFT),
    ])
    def test_opposite(self, direction, expected):
        assert direction.opposite() is expected

    def test_opposite_twice_is_identity(self):
        for direction in Direction:
            assert direction.opposite().opposite() is direction


class TestDirectionParse:
    @pytest.mark.parametrize("token,expected", [
        ("L", Direction.LEFT),
        ("l", Direction.LEFT),
        ("R", Direction.RIGHT),
        ("r", Direction.RIGHT),
        ("C", Direction.CENTER),
        ("c", Direction.CENTER),
        ("/", Direction.CENTER),
    ])
    def test_parse_valid(self, token, expected):
        assert Direction.parse(token) is expected

    @pytest.mark.parametrize("token", ["", "X", "LEFT", "RR", "-1", "0", " L ", "R\n", " / "])
    def test_parse_invalid_returns_none(self, token):
        assert Direction.parse(token) is None

    def test_center_parses_to_falsy_value(self):
        # CENTER is 0; callers must compare against None, not truthiness
        direction = Direction.parse("C")
        assert direction is not None
        assert not direction


class TestDirectionToken:
    def test_token_round_trips(self):
        for direction in Direction:
            assert Direction.parse(direction.token) is direction
