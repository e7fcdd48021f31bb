# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Diagnostics for failed Fetch statements.

The interpreter answers results carrying an error kind,
reporters turn failed results into diagnostic messages.

Unit tests and examples: tests/test_fetchsh_report.py
"""


from fetchsh.errors import FetchCommandNotFoundError, FetchError
from fetchsh.io import FetchOutput
from fetchsh.shell import FetchCommandError, FetchResult


class FetchReporter:
    """Base reporter, plain text diagnostics."""

    def report(self, result: FetchResult, out: FetchOutput) -> None:
        """Write the diagnostic for a result, if it has failed.

        Args:
            result: The statement's outcome.
            out: Where to write the diagnostic.
        """
        if result.error:
            self.on_error(result.error, out)

    def on_error(self, e: FetchError, out: FetchOutput) -> None:
        """Dispatch an error to the appropriate hook.

        Args:
            e: The error event.
            out: Where to write the diagnostic.
        """
        if isinstance(e, FetchCommandNotFoundError):
            self.on_cmd_not_found_error(e, out)
        elif isinstance(e, FetchCommandError):
            self.on_cmd_failed_error(e, out)
        else:
            self.on_statement_error(e, out)

    def on_cmd_not_found_error(
        self, e: FetchCommandNotFoundError, out: FetchOutput
    ) -> None:
        """Called when the statement's keyword is not a command."""
        out.write(f"fetch: command not found: {e.name}")

    def on_cmd_failed_error(
        self, e: FetchCommandError, out: FetchOutput
    ) -> None:
        """Called when the dispatched command has failed."""
        out.write(f"{e.cmd.name}: {e.msg}")

    def on_statement_error(self, e: FetchError, out: FetchOutput) -> None:
        """Called when the input line could not be tokenized."""
        out.write(f"fetch: {e.msg}")
