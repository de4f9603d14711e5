"""
Machine — Rules, configurations, and the reversible stepping engine.

A MachineSpec holds an ordered rule table. `step` applies the first
matching rule to a configuration; `invert` lists every configuration
that some rule could have turned into the given one in a single step.
Both are pure: configurations and tapes are never mutated.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Tuple, Union

from config import COMMENT_MARKER, DEFAULT_SYMBOL, WINDOW_PADDING
from direction import Direction
from tape import Tape

logger = logging.getLogger("tminvert.machine")

# state, symbol -> symbol, state
READ_WRITE_PATTERN = re.compile(r"(\w+)\s*,\s*(\w+)\s*->\s*(\w+)\s*,\s*(\w+)")
# state -> direction, state
MOVE_PATTERN = re.compile(r"(\w+)\s*->\s*([^\s,]+)\s*,\s*(\w+)")

HALT_LABEL = "HALT"


class RuleParseError(ValueError):
    """Raised when rule-table text cannot be parsed. No partial table is produced."""

    def __init__(self, message: str, line: Optional[str] = None, token: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.token = token


class UnknownStateError(RuleParseError):
    """Raised when a state label is not part of a machine's vocabulary."""
    pass


class HaltedMachineError(RuntimeError):
    """Raised when stepping forward from a halted configuration."""
    pass


# ── Configuration ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Configuration:
    """Instantaneous description of a machine: tape, state label, halted flag."""

    tape: Tape
    state: str
    halted: bool = False

    def resumed(self) -> "Configuration":
        """The same tape and state with the halted flag cleared."""
        return Configuration(self.tape, self.state, False)

    def render(self, padding: int = WINDOW_PADDING) -> str:
        """One-line snapshot; the head cell is bracketed."""
        label = HALT_LABEL if self.halted else self.state
        start, symbols = self.tape.window(padding)
        cells = " ".join(
            f"[{symbol}]" if start + offset == self.tape.head else symbol
            for offset, symbol in enumerate(symbols)
        )
        return f"{label} @{start}: {cells}"

    def to_dict(self) -> Dict[str, Any]:
        return {"tape": self.tape.to_dict(), "state": self.state, "halted": self.halted}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Configuration":
        """Raises ValueError naming the first malformed field."""
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be an object, got {type(data).__name__}")
        if "state" not in data:
            raise ValueError("Configuration is missing 'state'")
        if not isinstance(data["state"], str):
            raise ValueError("Configuration field 'state' must be a string")
        halted = data.get("halted", False)
        if not isinstance(halted, bool):
            raise ValueError("Configuration field 'halted' must be true or false")
        tape = data.get("tape", {})
        if not isinstance(tape, dict):
            raise ValueError("Configuration field 'tape' must be an object")
        return cls(Tape.from_dict(tape), data["state"], halted)

    def save(self, path: Path) -> None:
        """Persist the configuration to a JSON file."""
        path.write_text(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def load(cls, path: Path) -> "Configuration":
        """Load a configuration from a JSON file."""
        return cls.from_dict(json.loads(path.read_text()))


# ── Rules ────────────────────────────────────────────────────────────


class StateSymbol(NamedTuple):
    state: str
    symbol: str


@dataclass(frozen=True)
class ReadWriteRule:
    """On (state, symbol) write a symbol and change state; the head stays put."""

    trigger: StateSymbol
    result: StateSymbol

    def __str__(self) -> str:
        return (
            f"{self.trigger.state}, {self.trigger.symbol} -> "
            f"{self.result.symbol}, {self.result.state}"
        )


@dataclass(frozen=True)
class MoveRule:
    """On a state, move the head and change state; the tape is untouched."""

    trigger_state: str
    direction: Direction
    result_state: str

    def __str__(self) -> str:
        return f"{self.trigger_state} -> {self.direction.token}, {self.result_state}"


Rule = Union[ReadWriteRule, MoveRule]


def read_write(trigger_state: str, trigger_symbol: str, result_symbol: str, result_state: str) -> ReadWriteRule:
    """Shorthand for building a ReadWriteRule."""
    return ReadWriteRule(StateSymbol(trigger_state, trigger_symbol), StateSymbol(result_state, result_symbol))


def move(trigger_state: str, direction: Direction, result_state: str) -> MoveRule:
    """Shorthand for building a MoveRule."""
    return MoveRule(trigger_state, direction, result_state)


def _unknown_rule(rule: object) -> TypeError:
    return TypeError(f"Unknown rule type: {type(rule).__name__}")


# ── Machine Specification ────────────────────────────────────────────


class MachineSpec:
    """
    An ordered rule table plus the state and symbol vocabularies.

    Rule order matters: `step` applies the first matching rule. The
    vocabularies are informational and are not consulted when matching.
    When `symbols` is omitted it is derived from the rules plus `default_symbol`.
    """

    __slots__ = ("_rules", "_states", "_symbols")

    def __init__(
        self,
        rules: Iterable[Rule],
        states: Optional[Iterable[str]] = None,
        symbols: Optional[Iterable[str]] = None,
        default_symbol: str = DEFAULT_SYMBOL,
    ) -> None:
        self._rules = tuple(rules)
        for rule in self._rules:
            if not isinstance(rule, (ReadWriteRule, MoveRule)):
                raise _unknown_rule(rule)
        self._states: FrozenSet[str] = frozenset(
            states if states is not None else _states_of(self._rules)
        )
        self._symbols: FrozenSet[str] = frozenset(
            symbols if symbols is not None else _symbols_of(self._rules, default_symbol)
        )

    @classmethod
    def parse(
        cls,
        text: str,
        default_symbol: str = DEFAULT_SYMBOL,
        comment_marker: str = COMMENT_MARKER,
    ) -> "MachineSpec":
        """
        Parse a newline-delimited rule table. Lines take one of two forms:

            state, symbol -> symbol, state    (read/write rule)
            state -> direction, state         (move rule)

        Blank lines and lines starting with the comment marker are skipped.
        Raises RuleParseError naming the first offending line or token.
        """
        states: List[str] = []
        symbols: List[str] = [default_symbol]
        rules: List[Rule] = []

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line or line.startswith(comment_marker):
                continue

            match = READ_WRITE_PATTERN.fullmatch(line)
            if match:
                trigger_state, trigger_symbol, result_symbol, result_state = match.groups()
                symbols += [trigger_symbol, result_symbol]
                states += [trigger_state, result_state]
                rules.append(read_write(trigger_state, trigger_symbol, result_symbol, result_state))
                continue

            match = MOVE_PATTERN.fullmatch(line)
            if match:
                trigger_state, token, result_state = match.groups()
                direction = Direction.parse(token)
                if direction is None:
                    raise RuleParseError(f"Invalid direction: {token}", line=line, token=token)
                states += [trigger_state, result_state]
                rules.append(move(trigger_state, direction, result_state))
                continue

            raise RuleParseError(f"Invalid rule: {line}", line=line)

        spec = cls(rules, states, symbols)
        logger.debug(
            f"Parsed {len(rules)} rules over {len(spec.states)} states "
            f"and {len(spec.symbols)} symbols"
        )
        return spec

    # ── Properties ───────────────────────────────────────────────────

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @property
    def states(self) -> FrozenSet[str]:
        return self._states

    @property
    def symbols(self) -> FrozenSet[str]:
        return self._symbols

    def check_state(self, label: str) -> str:
        """Return `label` if it is a declared state, else raise UnknownStateError."""
        if label not in self._states:
            raise UnknownStateError(
                f"Unknown state: {label}. Declared states: {sorted(self._states)}",
                token=label,
            )
        return label

    # ── Simulation ───────────────────────────────────────────────────

    def step(self, current: Configuration) -> Configuration:
        """
        Apply the first rule matching the current state (and, for
        read/write rules, the symbol under the head). If nothing matches
        the result is the same tape and state, marked halted.
        """
        if current.halted:
            raise HaltedMachineError(
                f"Cannot step a halted configuration (state '{current.state}')"
            )

        state = current.state
        symbol = current.tape.symbol_at_head()

        for rule in self._rules:
            if isinstance(rule, ReadWriteRule):
                if rule.trigger.state == state and rule.trigger.symbol == symbol:
                    return Configuration(current.tape.write_at_head(rule.result.symbol), rule.result.state, False)
            elif isinstance(rule, MoveRule):
                if rule.trigger_state == state:
                    return Configuration(current.tape.move(rule.direction), rule.result_state, False)
            else:
                raise _unknown_rule(rule)

        return Configuration(current.tape, current.state, True)

    def invert(self, current: Configuration) -> List[Configuration]:
        """
        All configurations that a single rule could have stepped into
        `current`, in rule order. Duplicates are kept.

        A halted configuration's only predecessor is itself, un-halted.
        """
        if current.halted:
            return [current.resumed()]

        result: List[Configuration] = []
        for rule in self._rules:
            if isinstance(rule, ReadWriteRule):
                if rule.result.state != current.state:
                    continue
                if rule.result.symbol != current.tape.symbol_at_head():
                    continue
                result.append(Configuration(current.tape.write_at_head(rule.trigger.symbol), rule.trigger.state, False))
            elif isinstance(rule, MoveRule):
                if rule.result_state != current.state:
                    continue
                back = rule.direction.opposite()
                result.append(Configuration(current.tape.move(back), rule.trigger_state, False))
            else:
                raise _unknown_rule(rule)

        return result

    # ── Display ──────────────────────────────────────────────────────

    def to_text(self) -> str:
        """The rule table in the text form accepted by parse()."""
        return "\n".join(str(rule) for rule in self._rules)

    def __repr__(self) -> str:
        return (
            f"MachineSpec(rules={len(self._rules)}, states={len(self._states)}, "
            f"symbols={len(self._symbols)})"
        )


def _states_of(rules: Iterable[Rule]) -> List[str]:
    states: List[str] = []
    for rule in rules:
        if isinstance(rule, ReadWriteRule):
            states += [rule.trigger.state, rule.result.state]
        elif isinstance(rule, MoveRule):
            states += [rule.trigger_state, rule.result_state]
        else:
            raise _unknown_rule(rule)
    return states


def _symbols_of(rules: Iterable[Rule], default_symbol: str) -> List[str]:
    symbols: List[str] = [default_symbol]
    for rule in rules:
        if isinstance(rule, ReadWriteRule):
            symbols += [rule.trigger.symbol, rule.result.symbol]
    return symbols
