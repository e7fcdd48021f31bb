# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""I/O streams for the Fetch interpreter.

- "/dev/null" I/O semantic: FetchOutput, FetchInput
- base terminal: FetchVT
- batch input sources: FetchInputFile, FetchInputCmds, FetchInputStream

Unit tests and examples: tests/test_fetchsh_io.py
"""

from typing import Any, IO, List

import sys


class FetchOutput:
    """Base for interpreter output streams.

    This base implementation behaves like "/dev/null".
    """

    def write(self, *args: Any, **kwargs: Any) -> None:
        """Write to output stream.

        Args:
            *args: Positional arguments.
              Semantic depends on the actual concrete stream.
            **kwargs: Keyword arguments.
              Semantic depends on the actual concrete stream.
        """

    def flush(self) -> None:
        """Flush output stream.

        Semantic depends on the actual concrete stream.
        """


class FetchInput:
    """Base for interpreter input streams.

    This base implementation immediately signals EOF.
    """

    def readline(self) -> str:
        """Read the next input line.

        Returns:
            The next input line, without end-of-line.

        Raises:
            EOFError: End of input stream.
        """
        raise EOFError()


class FetchVT(FetchOutput):
    """Base terminal, writes to stdout."""

    def write(self, *args: Any, **kwargs: Any) -> None:
        """Write to stdout.

        Overrides FetchOutput.write().

        Args:
            *args: Positional arguments, standard Python print() semantic.
            **kwargs: Keyword arguments, standard Python print() semantic.
        """
        print(*args, **kwargs)

    def flush(self) -> None:
        """Flush stdout.

        Overrides FetchOutput.flush().
        """
        sys.stdout.flush()


class FetchInputStream(FetchInput):
    """Read input lines from a text stream, e.g. stdin."""

    _in: IO[str]

    def __init__(self, stream: IO[str]) -> None:
        """Initialize input stream.

        Args:
            stream: The text stream to read lines from.
        """
        self._in = stream

    def readline(self) -> str:
        """Overrides FetchInput.readline()."""
        line: str = self._in.readline()
        if line:
            return line.rstrip("\r\n")
        raise EOFError()


class FetchInputFile(FetchInputStream):
    """Batch file.

    Text file containing Fetch statements, one per line.
    Empty lines and comment lines (starting with "#") are skipped.
    """

    class Error(BaseException):
        """Failed to open input file for reading."""

    def __init__(self, path: str) -> None:
        """Initialize input stream.

        Args:
            path: Path to input file.

        Raises:
            FetchInputFile.Error: Failed to open input file.
        """
        try:
            stream = open(  # pylint: disable=consider-using-with
                path, "r", encoding="utf-8"
            )
        except OSError as e:
            raise FetchInputFile.Error(str(e)) from e
        super().__init__(stream)

    def readline(self) -> str:
        """Overrides FetchInput.readline()."""
        line: str = self._in.readline()

        while line and not self._is_statement(line):
            line = self._in.readline()

        if line:
            return line.rstrip("\r\n")

        self._in.close()
        raise EOFError()

    def _is_statement(self, line: str) -> bool:
        return not (line.isspace() or line.startswith("#"))


class FetchInputCmds(FetchInput):
    """Command-line argument source.

    Returns statements as they are provided on the tool command line.
    """

    _cmds: List[str]

    def __init__(self, cmds: List[str]) -> None:
        """Initialize object.

        Args:
            cmds: List of statements to execute.
        """
        self._cmds = list(cmds)

    def readline(self) -> str:
        """Overrides FetchInput.readline()."""
        if self._cmds:
            return self._cmds.pop(0)
        raise EOFError()
