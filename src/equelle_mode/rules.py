"""Ordered tokenizer rule tables.

A rule is a (pattern, action) pair. Patterns are tried as prefix matches
at the cursor; the longest match wins and ties go to the rule registered
first, so registration order is part of the grammar.

Thread Safety:
RuleTable is immutable after creation. Safe to share between buffers.
Use RuleTableBuilder for mutable construction.

Example:
    >>> builder = RuleTableBuilder()
    >>> rules = builder.add(r"[a-z]+", token_action("ID")).add_token(r"\\{", "{").build()
    >>> len(rules)
    2
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from equelle_mode.errors import RuleTableError
from equelle_mode.tokens import Token

Action = Callable[[str, int], Token]


@dataclass(frozen=True, slots=True)
class Rule:
    """A (pattern, action) pair in the ordered tokenizer table.

    Attributes:
        pattern: Compiled pattern matched as a prefix of the remaining line
        action: Maps (matched text, line number) to a Token

    """

    pattern: re.Pattern[str]
    action: Action


def token_action(name: str) -> Action:
    """Action producing a token named ``name`` from the matched text.

    Example:
        >>> token_action("NUMBER")("42", 3).name
        'NUMBER'
    """

    def action(text: str, lineno: int) -> Token:
        return Token.create(name, text, lineno)

    action.__name__ = f"token_action_{name}"
    return action


class RuleTable:
    """Immutable, totally ordered sequence of rules.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: tuple[Rule, ...]) -> None:
        """Initialize table with pre-built rules.

        Use RuleTableBuilder to create instances.
        """
        self._rules = rules

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Rules in registration order."""
        return self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __getitem__(self, index: int) -> Rule:
        return self._rules[index]


class RuleTableBuilder:
    """Mutable builder for RuleTable.

    Register rules in priority order, then call build() to create an
    immutable table.
    """

    __slots__ = ("_rules",)

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._rules: list[Rule] = []

    def add(self, pattern: str | re.Pattern[str], action: Action) -> RuleTableBuilder:
        """Register a rule after all previously registered rules.

        Args:
            pattern: Regular expression source or compiled pattern
            action: Callable mapping (text, lineno) to a Token

        Returns:
            Self for chaining

        Raises:
            RuleTableError: If the pattern does not compile or the action
                is not callable
        """
        index = len(self._rules)
        if not callable(action):
            raise RuleTableError(f"action {action!r} is not callable", index)
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern)
            except re.error as e:
                raise RuleTableError(f"invalid pattern {pattern!r}: {e}", index) from e
        self._rules.append(Rule(pattern=pattern, action=action))
        return self

    def add_token(self, pattern: str | re.Pattern[str], name: str) -> RuleTableBuilder:
        """Register a rule producing a token named ``name``."""
        return self.add(pattern, token_action(name))

    def add_all(
        self, entries: list[tuple[str | re.Pattern[str], Action]]
    ) -> RuleTableBuilder:
        """Register multiple (pattern, action) pairs in order.

        Returns:
            Self for chaining
        """
        for pattern, action in entries:
            self.add(pattern, action)
        return self

    def build(self) -> RuleTable:
        """Build immutable table from registered rules."""
        return RuleTable(tuple(self._rules))

    def __len__(self) -> int:
        """Number of registered rules."""
        return len(self._rules)
