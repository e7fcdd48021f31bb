# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch statement tokenizer.

Split an input line into a command segment and an optional data segment:

    LINE := COMMAND_SEGMENT ["(" DATA_SEGMENT ")"] [EOL]

The command segment is a colon separated list of tokens,
the first of which is the command keyword:

    COMMAND_SEGMENT := COMMAND [":" SUBCOMMAND]...

The data segment is a space separated list of byte constants:

    DATA_SEGMENT := [BYTE [" " BYTE]...]

The tokenizer does not validate tokens against the grammar terminals,
this is the job of the dispatcher and the commands.

Unit tests and examples: tests/test_fetchsh_tokenizer.py
"""


from typing import Optional, Sequence, Tuple

import logging
import re

from fetchsh.errors import FetchSyntaxError, FetchTooManyTokensError

logger = logging.getLogger(__name__)


class FetchStatement:
    """A tokenized Fetch statement.

    Statements are created for, and owned by, a single interpreter call.
    """

    _cmd_toks: Tuple[str, ...]
    _data_toks: Optional[Tuple[str, ...]]

    def __init__(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]] = None,
    ) -> None:
        """Initialize statement.

        Args:
            cmd_toks: The command tokens, command keyword first.
            data_toks: The data tokens, None if the statement
              has no data segment.
        """
        self._cmd_toks = tuple(cmd_toks)
        self._data_toks = tuple(data_toks) if data_toks is not None else None

    @property
    def cmd_toks(self) -> Tuple[str, ...]:
        """The colon separated command tokens.

        Empty for blank lines.
        """
        return self._cmd_toks

    @property
    def data_toks(self) -> Optional[Tuple[str, ...]]:
        """The space separated data tokens.

        None when there is no data segment at all,
        an empty tuple for an empty data segment "()".
        """
        return self._data_toks

    @property
    def keyword(self) -> Optional[str]:
        """The command keyword as typed, None for blank lines."""
        return self._cmd_toks[0] if self._cmd_toks else None

    @property
    def is_blank(self) -> bool:
        """Whether this statement was parsed from a blank line."""
        return not self._cmd_toks

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FetchStatement):
            return (other.cmd_toks == self.cmd_toks) and (
                other.data_toks == self.data_toks
            )
        return False

    def __repr__(self) -> str:
        return f"{list(self._cmd_toks)} ({self._data_toks})"


class FetchTokenizer:
    """Fetch statement tokenizer."""

    # Any white space within the command segment.
    _re_spaces: re.Pattern[str] = re.compile(r"\s+")

    _max_line_chars: int
    _max_cmd_toks: int
    _max_data_toks: int

    def __init__(
        self,
        max_line_chars: int = 256,
        max_cmd_toks: int = 8,
        max_data_toks: int = 8,
    ) -> None:
        """Initialize tokenizer.

        Args:
            max_line_chars: Maximum number of characters per line,
              not including the end-of-line.
            max_cmd_toks: Maximum number of command tokens,
              command keyword included.
            max_data_toks: Maximum number of data tokens.
        """
        self._max_line_chars = max_line_chars
        self._max_cmd_toks = max_cmd_toks
        self._max_data_toks = max_data_toks

    @property
    def max_line_chars(self) -> int:
        """Maximum number of characters per line."""
        return self._max_line_chars

    @property
    def max_cmd_toks(self) -> int:
        """Maximum number of command tokens."""
        return self._max_cmd_toks

    @property
    def max_data_toks(self) -> int:
        """Maximum number of data tokens."""
        return self._max_data_toks

    def tokenize(self, line: str) -> FetchStatement:
        """Split an input line into command and data tokens.

        Args:
            line: The input line, with or without its end-of-line.

        Returns:
            The tokenized statement. Blank lines answer
            an empty statement.

        Raises:
            FetchSyntaxError: The line is too long,
              or has a data segment but no command.
            FetchTooManyTokensError: A segment has more tokens than allowed.
              Tokens are then discarded altogether.
        """
        line = line.rstrip("\r\n")
        if len(line) > self._max_line_chars:
            raise FetchSyntaxError(
                f"line too long ({len(line)} > {self._max_line_chars})"
            )

        if line.startswith("("):
            raise FetchSyntaxError("no command (only data ?)")

        colon_part, paren, paren_part = line.partition("(")
        cmd_segment = self._re_spaces.sub("", colon_part)

        if not cmd_segment:
            if paren:
                raise FetchSyntaxError("no command (only data ?)")
            # Blank line.
            return FetchStatement(())

        cmd_toks = self._split_cmd_segment(cmd_segment)
        data_toks = self._split_data_segment(paren_part) if paren else None

        logger.debug("tokenized %r: %s %s", line, cmd_toks, data_toks)
        return FetchStatement(cmd_toks, data_toks)

    def _split_cmd_segment(self, segment: str) -> Tuple[str, ...]:
        # Consecutive colons do not produce empty tokens.
        toks = tuple(tok for tok in segment.split(":") if tok)
        if not toks:
            raise FetchSyntaxError(f"no command: '{segment}'")
        if len(toks) > self._max_cmd_toks:
            raise FetchTooManyTokensError(
                "command", len(toks), self._max_cmd_toks
            )
        return toks

    def _split_data_segment(self, segment: str) -> Tuple[str, ...]:
        content, paren, trailing = segment.partition(")")
        if not paren:
            raise FetchSyntaxError("missing ')'")
        if trailing.strip():
            raise FetchSyntaxError(f"unexpected text after ')': '{trailing}'")

        toks = tuple(content.split())
        if len(toks) > self._max_data_toks:
            raise FetchTooManyTokensError(
                "data", len(toks), self._max_data_toks
            )
        return toks
