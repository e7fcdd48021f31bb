# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch language terminals.

The Fetch language is a right regular grammar:

    STATEMENT := COMMAND EOL
               | COMMAND ":" SUBCOMMAND... EOL
               | COMMAND ":" SUBCOMMAND... ":" DIRECTION ":" SENSE EOL
               | COMMAND ":" SUBCOMMAND... "(" BYTE [" " BYTE]... ")" EOL

    BYTE := DIGIT DIGIT

This module defines:

- the terminal sets, i.e. the valid tokens at each grammar position
- the token matcher, which finds a candidate token within a terminal set

Unit tests and examples: tests/test_fetchsh_terminals.py
"""


from typing import Iterator, Optional, Sequence, Tuple

from fetchsh.config import FetchMatchPolicy


class FetchTerminalSet:
    """Named, ordered and immutable set of terminals.

    A terminal set enumerates the valid tokens at one grammar position.
    """

    _name: str
    _terminals: Tuple[str, ...]

    def __init__(self, name: str, terminals: Sequence[str]) -> None:
        """Define a terminal set.

        Args:
            name: The grammar position this set is valid for, e.g. "port".
            terminals: The valid tokens, in lower case.
        """
        self._name = name
        self._terminals = tuple(terminals)

    @property
    def name(self) -> str:
        """Grammar position name."""
        return self._name

    @property
    def terminals(self) -> Tuple[str, ...]:
        """The valid tokens, in definition order."""
        return self._terminals

    def __getitem__(self, index: int) -> str:
        return self._terminals[index]

    def __len__(self) -> int:
        return len(self._terminals)

    def __iter__(self) -> Iterator[str]:
        return iter(self._terminals)

    def __repr__(self) -> str:
        return f"{self._name}: {self._terminals}"


class FetchTerminals:
    """The Fetch language terminal sets.

    Defined once, read-only.
    """

    @classmethod
    def getinstance(cls) -> "FetchTerminals":
        """Access the Fetch language terminals."""
        return _fetch_terminals

    COMMAND = FetchTerminalSet(
        "command",
        ("?", "help", "gpio", "adc", "spi", "i2c", "resetpins", "version"),
    )
    """Top-level command keywords."""

    GPIO_SUBCOMMAND = FetchTerminalSet(
        "gpio_subcommand", ("get", "set", "clear", "configure")
    )
    """GPIO actions."""

    GPIO_DIRECTION = FetchTerminalSet("gpio_direction", ("input", "output"))
    """GPIO pad directions."""

    GPIO_SENSE = FetchTerminalSet(
        "gpio_sense", ("pullup", "pulldown", "floating", "analog")
    )
    """GPIO pad senses."""

    PORT = FetchTerminalSet(
        "port", tuple(f"port{letter}" for letter in "abcdefghi")
    )
    """GPIO ports."""

    PIN = FetchTerminalSet("pin", tuple(f"pin{num}" for num in range(16)))
    """GPIO pins."""

    DIGIT = FetchTerminalSet("digit", tuple("0123456789abcde"))
    """Digits of data byte constants."""

    EOL = FetchTerminalSet("eol", ("\n",))
    """End of statement."""

    WHITESPACE = FetchTerminalSet("whitespace", (" ", "\t"))
    """Data byte separators."""

    @property
    def all(self) -> Tuple[FetchTerminalSet, ...]:
        """All terminal sets."""
        return (
            self.COMMAND,
            self.GPIO_SUBCOMMAND,
            self.GPIO_DIRECTION,
            self.GPIO_SENSE,
            self.PORT,
            self.PIN,
            self.DIGIT,
            self.EOL,
            self.WHITESPACE,
        )


class FetchMatcher:
    """Token matcher.

    Find candidate tokens within terminal sets, ignoring case.
    """

    _policy: FetchMatchPolicy
    _max_strlen: int

    def __init__(
        self,
        policy: FetchMatchPolicy = FetchMatchPolicy.EXACT,
        max_strlen: int = 25,
    ) -> None:
        """Initialize matcher.

        Args:
            policy: How candidates compare with terminals.
            max_strlen: Comparison length cap for the legacy policy.
        """
        self._policy = policy
        self._max_strlen = max_strlen

    @property
    def policy(self) -> FetchMatchPolicy:
        """Comparison policy."""
        return self._policy

    def match(
        self, tset: FetchTerminalSet, candidate: Optional[str]
    ) -> Optional[int]:
        """Search a terminal set for a candidate token.

        Args:
            tset: The terminal set to search.
            candidate: The token to search for.
              A missing token (None) never matches.

        Returns:
            The index of the first matching terminal, None if no match.
        """
        if candidate is None:
            return None
        for i, terminal in enumerate(tset):
            if self.equals(terminal, candidate):
                return i
        return None

    def equals(self, terminal: str, candidate: str) -> bool:
        """Compare a terminal and a candidate token according to policy.

        Args:
            terminal: A grammar terminal.
            candidate: The token to compare with.

        Returns:
            True if the candidate stands for the terminal.
        """
        if self._policy is FetchMatchPolicy.LEGACY:
            n = min(max(len(terminal), len(candidate)), self._max_strlen)
            return terminal[:n].lower() == candidate[:n].lower()
        return terminal.lower() == candidate.lower()


_fetch_terminals = FetchTerminals()
