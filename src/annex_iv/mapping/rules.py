"""Ordered classification rules.

Lookup tables whose match order matters are expressed as tuples of
``ClassificationRule`` evaluated top to bottom; the first rule whose
predicate accepts the input decides the code.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional


@dataclass(frozen=True)
class ClassificationRule:
    """A predicate paired with the code it yields."""

    name: str
    predicate: Callable[[str], bool]
    code: str

    def matches(self, value: str) -> bool:
        return self.predicate(value)


def contains_any(*keywords: str) -> Callable[[str], bool]:
    """Predicate: the value contains at least one keyword."""
    return lambda value: any(kw in value for kw in keywords)


def equals(expected: str) -> Callable[[str], bool]:
    """Predicate: the value equals ``expected`` exactly."""
    return lambda value: value == expected


def first_match(
    rules: Iterable[ClassificationRule], value: str
) -> Optional[ClassificationRule]:
    """Return the first rule matching ``value``, or None."""
    for rule in rules:
        if rule.matches(value):
            return rule
    return None


def classify(rules: Iterable[ClassificationRule], value: str, default: str) -> str:
    """Return the code of the first matching rule, else ``default``."""
    rule = first_match(rules, value)
    return rule.code if rule else default
