# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch interpreter errors.

All errors are recovered by the interpreter,
which answers a failed result carrying the error kind.

Command execution errors are defined with the commands, see fetchsh.shell.
"""


from typing import Optional

import enum


class FetchErrorKind(enum.Enum):
    """Kinds of errors an input line may fail with."""

    SYNTAX = "syntax error"
    TOO_MANY_TOKENS = "too many tokens"
    UNKNOWN_COMMAND = "unknown command"
    UNKNOWN_SUBCOMMAND = "unknown subcommand"
    UNKNOWN_PORT = "unknown port"
    UNKNOWN_PIN = "unknown pin"
    UNKNOWN_DIRECTION = "unknown direction"
    UNKNOWN_SENSE = "unknown sense"
    MISSING_ARGUMENT = "missing argument"
    NOT_IMPLEMENTED = "not implemented"
    INVALID_DATA = "invalid data"
    COMMAND_DISABLED = "command disabled"


class FetchError(Exception):
    """Base for Fetch interpreter errors."""

    _kind: FetchErrorKind
    _msg: Optional[str]

    def __init__(
        self, kind: FetchErrorKind, msg: Optional[str] = None
    ) -> None:
        """An interpreter error happened.

        Args:
            kind: The error kind.
            msg: A message describing the error.
              Defaults to the error kind's description.
        """
        super().__init__(msg or kind.value)
        self._kind = kind
        self._msg = msg

    @property
    def kind(self) -> FetchErrorKind:
        """The error kind."""
        return self._kind

    @property
    def msg(self) -> str:
        """A message describing the error."""
        return self._msg or self._kind.value


class FetchSyntaxError(FetchError):
    """An input line does not match the Fetch grammar."""

    def __init__(self, msg: Optional[str] = None) -> None:
        """New error.

        Args:
            msg: A message describing the error.
        """
        super().__init__(FetchErrorKind.SYNTAX, msg)


class FetchTooManyTokensError(FetchError):
    """A segment of the input line has too many tokens."""

    _segment: str
    _count: int
    _limit: int

    def __init__(self, segment: str, count: int, limit: int) -> None:
        """New error.

        Args:
            segment: Which segment overflowed, "command" or "data".
            count: The number of tokens found.
            limit: The maximum number of tokens allowed.
        """
        super().__init__(
            FetchErrorKind.TOO_MANY_TOKENS,
            f"too many {segment} tokens ({count} > {limit})",
        )
        self._segment = segment
        self._count = count
        self._limit = limit

    @property
    def segment(self) -> str:
        """The overflowed segment."""
        return self._segment

    @property
    def count(self) -> int:
        """The number of tokens found."""
        return self._count

    @property
    def limit(self) -> int:
        """The maximum number of tokens allowed."""
        return self._limit


class FetchCommandNotFoundError(FetchError):
    """A command keyword does not exist."""

    _name: str

    def __init__(self, name: str) -> None:
        """New error.

        Args:
            name: The unrecognized command keyword.
        """
        super().__init__(
            FetchErrorKind.UNKNOWN_COMMAND, f"{name}: command not found"
        )
        self._name = name

    @property
    def name(self) -> str:
        """The unrecognized command keyword."""
        return self._name
