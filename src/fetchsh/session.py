# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Batch Fetch sessions.

A session binds an interpreter, an input source and an output stream,
then runs statements until EOF:

- read the next input line
- tokenize and dispatch the statement
- report failed statements

Unit tests and examples: tests/test_fetchsh_session.py
"""

from typing import List, Optional, Union

import errno
import sys

from fetchsh.config import FetchConfig
from fetchsh.gpio import FetchGpio, FetchGpioSim
from fetchsh.io import (
    FetchInput,
    FetchInputCmds,
    FetchInputFile,
    FetchInputStream,
    FetchOutput,
    FetchVT,
)
from fetchsh.report import FetchReporter
from fetchsh.shell import FetchResult, FetchShell

_fetchconf: FetchConfig = FetchConfig.getinstance()


class FetchSession:
    """Batch session."""

    class Error(BaseException):
        """Failed to open the session input."""

    _sh: FetchShell
    _is: FetchInput
    _vt: FetchOutput
    _reporter: FetchReporter

    _last_result: Optional[FetchResult]

    @classmethod
    def create(
        cls,
        batch: Optional[Union[str, List[str]]] = None,
        gpio: Optional[FetchGpio] = None,
        vt: Optional[FetchOutput] = None,
        reporter: Optional[FetchReporter] = None,
    ) -> "FetchSession":
        """Create a new batch session.

        Args:
            batch: Where to read statements from, either:
              - string: path to a batch file
              - list: a list of statements
              - None: read statements from stdin
            gpio: The GPIO driver, defaults to the simulated driver.
            vt: The session's output stream, defaults to FetchVT.
            reporter: How to report failed statements.

        Returns:
            An initialized session.

        Raises:
            FetchSession.Error: Invalid batch input file.
        """
        return cls(
            FetchShell.create(gpio or FetchGpioSim()),
            cls._mk_input(batch),
            vt,
            reporter,
        )

    def __init__(
        self,
        sh: FetchShell,
        source: FetchInput,
        vt: Optional[FetchOutput] = None,
        reporter: Optional[FetchReporter] = None,
    ) -> None:
        """Initialize a session.

        Won't start the loop until run().

        Args:
            sh: The session's interpreter.
            source: Where to read statements from.
            vt: Where to write command outputs and diagnostics.
              Defaults to FetchVT.
            reporter: How to report failed statements.
              Defaults to plain text diagnostics.
        """
        self._sh = sh
        self._is = source
        self._vt = vt or FetchVT()
        self._reporter = reporter or FetchReporter()
        self._last_result = None

    @property
    def sh(self) -> FetchShell:
        """The session's interpreter."""
        return self._sh

    @property
    def last_result(self) -> Optional[FetchResult]:
        """Outcome of the last statement, None if none was run."""
        return self._last_result

    def run(self) -> int:
        """Run statements until EOF.

        Returns:
            The session status: -EINVAL if the last statement failed,
            0 otherwise.
        """
        while True:
            try:
                line = self._is.readline()
            except EOFError:
                break
            self.run_line(line)

        self._vt.flush()
        if self._last_result is not None and not self._last_result:
            return -errno.EINVAL
        return 0

    def run_line(self, line: str) -> FetchResult:
        """Run a single statement.

        Args:
            line: The input line.

        Returns:
            The statement's outcome.
        """
        result = self._sh.execute(line, self._vt)
        if not result:
            self._reporter.report(result, self._vt)
        elif result.statement and result.statement.is_blank:
            # Blank lines don't change the session status.
            return result

        self._last_result = result
        if _fetchconf.pref_sparse:
            self._vt.write()
        return result

    @classmethod
    def _mk_input(cls, batch: Optional[Union[str, List[str]]]) -> FetchInput:
        if batch is None:
            return FetchInputStream(sys.stdin)
        if isinstance(batch, str):
            try:
                return FetchInputFile(batch)
            except FetchInputFile.Error as e:
                raise FetchSession.Error(str(e)) from e
        return FetchInputCmds(batch)
