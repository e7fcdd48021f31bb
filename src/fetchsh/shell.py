# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch interpreter.

Turn Fetch statements into actions:

- tokenize input lines into command and data tokens
- validate the command keyword and dispatch to the matching command
- fold command errors into results, which carry an explicit error kind

Commands validate their own sub-tokens against the grammar terminals,
then call into the GPIO driver.

Unit tests and examples: tests/test_fetchsh_shell.py
"""


from types import MappingProxyType
from typing import (
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
)

import logging

from fetchsh.config import FetchConfig
from fetchsh.errors import (
    FetchError,
    FetchErrorKind,
    FetchCommandNotFoundError,
    FetchTooManyTokensError,
)
from fetchsh.gpio import FetchGpio
from fetchsh.io import FetchOutput
from fetchsh.terminals import FetchMatcher, FetchTerminals, FetchTerminalSet
from fetchsh.tokenizer import FetchStatement, FetchTokenizer

logger = logging.getLogger(__name__)

_fetchconf: FetchConfig = FetchConfig.getinstance()


class FetchCommand:
    """Fetch command.

    A command is defined by its keyword, a help string,
    and the number of data bytes it accepts.
    """

    # See name().
    _name: str

    # See helpstring().
    _helpstring: str

    # See max_data_bytes().
    _max_data_bytes: int

    # See enabled().
    _enabled: bool

    def __init__(
        self,
        name: str,
        helpstring: str,
        max_data_bytes: int = 0,
        enabled: bool = True,
    ) -> None:
        """Initialize a new Fetch command.

        Args:
            name: The command keyword, one of the command terminals.
            helpstring: Usage summary, printed by the "help" command.
              May be empty.
            max_data_bytes: Maximum number of data bytes the command accepts.
            enabled: Whether the dispatcher will run this command.
        """
        self._name = name
        self._helpstring = helpstring
        self._max_data_bytes = max_data_bytes
        self._enabled = enabled

    @property
    def name(self) -> str:
        """Command keyword."""
        return self._name

    @property
    def helpstring(self) -> str:
        """Usage summary."""
        return self._helpstring

    @property
    def max_data_bytes(self) -> int:
        """Maximum number of data bytes accepted."""
        return self._max_data_bytes

    @property
    def enabled(self) -> bool:
        """Whether the dispatcher will run this command."""
        return self._enabled

    def execute(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]],
        sh: "FetchShell",
        out: FetchOutput,
    ) -> None:
        """Execute the command.

        Args:
            cmd_toks: The statement's command tokens, keyword first.
            data_toks: The statement's data tokens, if any.
            sh: The interpreter context.
            out: Where the command will write its output.

        Raises:
            FetchCommandError: The command execution has failed.
        """
        del cmd_toks  # Unused by base implementation.
        del data_toks  # Unused by base implementation.
        del sh  # Unused by base implementation.
        del out  # Unused by base implementation.

    def __eq__(self, other: object) -> bool:
        """Commands equal when their names equal."""
        if isinstance(other, FetchCommand):
            return other.name == self.name
        return False

    def __hash__(self) -> int:
        """A command identity is based on its name."""
        return hash(self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name})"


class FetchDispatchTable:
    """Command dispatch table.

    Binds each command keyword to exactly one command.
    Built once, read-only.
    """

    _keywords: FetchTerminalSet
    _table: Mapping[str, FetchCommand]

    def __init__(
        self, keywords: FetchTerminalSet, commands: Sequence[FetchCommand]
    ) -> None:
        """Build the dispatch table.

        Args:
            keywords: The command terminals.
            commands: The commands to bind, one per command terminal.

        Raises:
            KeyError: A command terminal is left unbound.
            ValueError: A command is not named after a command terminal,
              or several commands share the same keyword.
        """
        bindings = {}
        for cmd in commands:
            if cmd.name not in keywords:
                raise ValueError(f"not a command keyword: '{cmd.name}'")
            if cmd.name in bindings:
                raise ValueError(f"keyword bound twice: '{cmd.name}'")
            bindings[cmd.name] = cmd

        for keyword in keywords:
            if keyword not in bindings:
                raise KeyError(keyword)

        self._keywords = keywords
        # Preserve the keywords order.
        self._table = MappingProxyType(
            {keyword: bindings[keyword] for keyword in keywords}
        )

    @property
    def keywords(self) -> FetchTerminalSet:
        """The command terminals."""
        return self._keywords

    @property
    def commands(self) -> List[FetchCommand]:
        """The bound commands, in keywords order."""
        return list(self._table.values())

    def at(self, index: int) -> FetchCommand:
        """Access the command bound to a keyword index.

        Args:
            index: Index of the keyword within the command terminals,
              as answered by the token matcher.
        """
        return self._table[self._keywords[index]]

    def __getitem__(self, keyword: str) -> FetchCommand:
        return self._table[keyword]

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)


class FetchResult:
    """Outcome of a Fetch statement.

    A result is truthy when the statement succeeded.
    """

    _statement: Optional[FetchStatement]
    _cmd: Optional[FetchCommand]
    _error: Optional[FetchError]

    def __init__(
        self,
        statement: Optional[FetchStatement] = None,
        cmd: Optional[FetchCommand] = None,
        error: Optional[FetchError] = None,
    ) -> None:
        """Initialize result.

        Args:
            statement: The tokenized statement,
              None if tokenization failed.
            cmd: The dispatched command, None if dispatch was not reached
              or the keyword did not match.
            error: The error the statement failed with, None on success.
        """
        self._statement = statement
        self._cmd = cmd
        self._error = error

    @property
    def ok(self) -> bool:
        """Whether the statement succeeded."""
        return self._error is None

    @property
    def statement(self) -> Optional[FetchStatement]:
        """The tokenized statement."""
        return self._statement

    @property
    def cmd(self) -> Optional[FetchCommand]:
        """The dispatched command."""
        return self._cmd

    @property
    def error(self) -> Optional[FetchError]:
        """The error the statement failed with."""
        return self._error

    @property
    def kind(self) -> Optional[FetchErrorKind]:
        """Kind of the error the statement failed with."""
        return self._error.kind if self._error else None

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        if self._error:
            return f"failed: {self._error.kind.name}: {self._error.msg}"
        return "ok"


class FetchShell:
    """Fetch interpreter.

    Binds the grammar terminals, the token matcher, the tokenizer,
    the dispatch table and the GPIO driver.

    The interpreter state is read-only once initialized:
    each call owns its tokens, and interpreters are reentrant.
    """

    VERSION_STRING = "0.1.0"
    """The Fetch interpreter version string."""

    # See terminals().
    _terminals: FetchTerminals

    # See matcher().
    _matcher: FetchMatcher

    # See tokenizer().
    _tokenizer: FetchTokenizer

    # See table().
    _table: FetchDispatchTable

    # See gpio().
    _gpio: FetchGpio

    @classmethod
    def create(
        cls,
        gpio: FetchGpio,
        disabled: Optional[Sequence[str]] = None,
    ) -> "FetchShell":
        """Create an interpreter configured with the user preferences.

        Args:
            gpio: The GPIO driver the commands will call.
            disabled: Keywords of the commands the dispatcher will refuse
              to run. Defaults to the configured preference.

        Returns:
            An initialized interpreter with all built-in commands.
        """
        # pylint: disable=import-outside-toplevel,cyclic-import
        from fetchsh.builtins import mk_builtins

        if disabled is None:
            disabled = _fetchconf.pref_disabled
        return cls(
            gpio,
            mk_builtins(disabled),
            FetchTokenizer(
                _fetchconf.limits_line_chars,
                _fetchconf.limits_cmd_toks,
                _fetchconf.limits_data_toks,
            ),
            FetchMatcher(
                _fetchconf.match_policy, _fetchconf.match_max_strlen
            ),
        )

    def __init__(
        self,
        gpio: FetchGpio,
        builtins: Sequence[FetchCommand],
        tokenizer: Optional[FetchTokenizer] = None,
        matcher: Optional[FetchMatcher] = None,
    ) -> None:
        """Initialize an interpreter.

        Args:
            gpio: The GPIO driver the commands will call.
            builtins: The commands to bind, one per command terminal.
            tokenizer: The statement tokenizer.
              Defaults to a tokenizer with the default limits.
            matcher: The token matcher.
              Defaults to exact case-insensitive matching.

        Raises:
            KeyError: A command terminal is left unbound.
            ValueError: Invalid command definitions.
        """
        self._gpio = gpio
        self._terminals = FetchTerminals.getinstance()
        self._tokenizer = tokenizer or FetchTokenizer()
        self._matcher = matcher or FetchMatcher()
        self._table = FetchDispatchTable(self._terminals.COMMAND, builtins)

    @property
    def gpio(self) -> FetchGpio:
        """The GPIO driver."""
        return self._gpio

    @property
    def terminals(self) -> FetchTerminals:
        """The grammar terminals."""
        return self._terminals

    @property
    def matcher(self) -> FetchMatcher:
        """The token matcher."""
        return self._matcher

    @property
    def tokenizer(self) -> FetchTokenizer:
        """The statement tokenizer."""
        return self._tokenizer

    @property
    def table(self) -> FetchDispatchTable:
        """The command dispatch table."""
        return self._table

    @property
    def commands(self) -> List[FetchCommand]:
        """The commands supported by this interpreter."""
        return self._table.commands

    def match(
        self, tset: FetchTerminalSet, candidate: Optional[str]
    ) -> Optional[int]:
        """Search a terminal set with the interpreter's token matcher.

        Args:
            tset: The terminal set to search.
            candidate: The token to search for, may be None.

        Returns:
            The index of the matching terminal, None if no match.
        """
        return self._matcher.match(tset, candidate)

    def tokenize(self, line: str) -> FetchStatement:
        """Tokenize an input line.

        Args:
            line: The input line.

        Returns:
            The tokenized statement.

        Raises:
            FetchSyntaxError: Invalid input line.
            FetchTooManyTokensError: Too many command or data tokens.
        """
        return self._tokenizer.tokenize(line)

    def find_command(self, keyword: str) -> FetchCommand:
        """Find the command a keyword stands for.

        Args:
            keyword: The command keyword as typed.

        Returns:
            The command bound to this keyword.

        Raises:
            FetchCommandNotFoundError: The keyword does not match
              any command terminal.
        """
        index = self._matcher.match(self._terminals.COMMAND, keyword)
        if index is None:
            raise FetchCommandNotFoundError(keyword)
        return self._table.at(index)

    def dispatch(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]] = None,
        out: Optional[FetchOutput] = None,
    ) -> FetchResult:
        """Dispatch tokens to the command the keyword stands for.

        Args:
            cmd_toks: The command tokens, keyword first.
              Empty for blank lines.
            data_toks: The data tokens, if any.
            out: Where the command will write its output.
              Defaults to "/dev/null".

        Returns:
            The statement's outcome.
        """
        return self._dispatch(
            FetchStatement(cmd_toks, data_toks), out or FetchOutput()
        )

    def execute(
        self, line: str, out: Optional[FetchOutput] = None
    ) -> FetchResult:
        """Tokenize and dispatch an input line.

        Errors are never raised, but answered within the result.

        Args:
            line: The input line.
            out: Where the command will write its output.
              Defaults to "/dev/null".

        Returns:
            The statement's outcome.
        """
        try:
            statement = self._tokenizer.tokenize(line)
        except FetchError as e:
            logger.debug("tokenizer: %s", e.msg)
            return FetchResult(error=e)
        return self._dispatch(statement, out or FetchOutput())

    def _dispatch(
        self, statement: FetchStatement, out: FetchOutput
    ) -> FetchResult:
        if statement.is_blank:
            return FetchResult(statement)

        cmd: Optional[FetchCommand] = None
        try:
            cmd = self.find_command(statement.cmd_toks[0])
            self._check_command(cmd, statement.data_toks)
            logger.debug("dispatch %s: %s", cmd.name, statement)
            cmd.execute(statement.cmd_toks, statement.data_toks, self, out)
        except FetchError as e:
            logger.debug("dispatch: %s", e.msg)
            return FetchResult(statement, cmd, e)

        return FetchResult(statement, cmd)

    def _check_command(
        self, cmd: FetchCommand, data_toks: Optional[Sequence[str]]
    ) -> None:
        if not cmd.enabled:
            raise FetchCommandError(
                cmd, FetchErrorKind.COMMAND_DISABLED, "command disabled"
            )

        if data_toks is None:
            return

        if len(data_toks) > cmd.max_data_bytes:
            raise FetchCommandError(
                cmd,
                FetchErrorKind.TOO_MANY_TOKENS,
                FetchTooManyTokensError(
                    "data", len(data_toks), cmd.max_data_bytes
                ).msg,
            )

        for tok in data_toks:
            if not self._is_byte(tok):
                raise FetchCommandError(
                    cmd, FetchErrorKind.INVALID_DATA, f"invalid byte: '{tok}'"
                )

    def _is_byte(self, tok: str) -> bool:
        # BYTE := DIGIT DIGIT
        return len(tok) == 2 and all(
            self._matcher.match(self._terminals.DIGIT, digit) is not None
            for digit in tok
        )


class FetchCommandError(FetchError):
    """An exceptional condition happened while executing a command.

    This may indicate:

    - a sub-token does not match its grammar terminals
    - a required sub-token is missing
    - the command, or the requested action, is not implemented
    - the command is disabled, or does not accept the data segment
    """

    _cmd: FetchCommand

    def __init__(
        self,
        cmd: FetchCommand,
        kind: FetchErrorKind,
        msg: Optional[str] = None,
    ) -> None:
        """New error.

        Args:
            cmd: The failed command.
            kind: The error kind.
            msg: A message describing the error.
        """
        super().__init__(kind, msg)
        self._cmd = cmd

    @property
    def cmd(self) -> FetchCommand:
        """The failed command."""
        return self._cmd
