"""Rule set data model.

A rule pairs a substring pattern with an action. The action is either a
literal replacement string or a callable that derives the replacement from
the matched line. Rules are evaluated in order and the first match wins, so
the rule set keeps its rules as an ordered tuple rather than a dict.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union

# Type alias for rule actions
Transform = Callable[[str], Any]
Action = Union[str, Transform]


@dataclass(frozen=True)
class Rule:
    """A single (pattern, action) pair."""

    pattern: str
    action: Any  # validated lazily by the line processor

    def matches(self, line: str) -> bool:
        return self.pattern in line


class RuleSet:
    """Immutable, ordered collection of rules with unique patterns."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        collected: list[Rule] = []
        seen: set[str] = set()
        for rule in rules:
            if not isinstance(rule.pattern, str):
                error_msg = f"Rule pattern must be a string, got {type(rule.pattern).__name__}"
                raise TypeError(error_msg)
            if rule.pattern in seen:
                error_msg = f"Duplicate rule pattern: {rule.pattern!r}"
                raise ValueError(error_msg)
            seen.add(rule.pattern)
            collected.append(rule)
        self._rules: tuple[Rule, ...] = tuple(collected)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> RuleSet:
        """Build a rule set from a mapping, using its insertion order."""
        return cls(Rule(pattern, action) for pattern, action in mapping.items())

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> RuleSet:
        """Build a rule set from an iterable of (pattern, action) pairs."""
        rules: list[Rule] = []
        for pair in pairs:
            try:
                pattern, action = pair
            except (TypeError, ValueError) as e:
                error_msg = f"Expected a (pattern, action) pair, got {pair!r}"
                raise TypeError(error_msg) from e
            rules.append(Rule(pattern, action))
        return cls(rules)

    @classmethod
    def coerce(cls, rules: RuleSet | Mapping[str, Any] | Iterable[tuple[str, Any]]) -> RuleSet:
        """Return ``rules`` as a RuleSet, converting mappings and pair lists."""
        if isinstance(rules, RuleSet):
            return rules
        if isinstance(rules, Mapping):
            return cls.from_mapping(rules)
        if isinstance(rules, (str, bytes)):
            error_msg = "Rules must be a mapping or an iterable of (pattern, action) pairs"
            raise TypeError(error_msg)
        return cls.from_pairs(rules)

    def first_match(self, line: str) -> Rule | None:
        """Return the earliest rule whose pattern occurs in ``line``."""
        for rule in self._rules:
            if rule.matches(line):
                return rule
        return None

    @property
    def patterns(self) -> list[str]:
        return [rule.pattern for rule in self._rules]

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return self._rules == other._rules

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules)!r})"
