# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch built-in "help" (alias "?").

Print the usage summary of the available commands.

Unit tests and examples: tests/test_fetchsh_builtins.py
"""


from typing import List, Optional, Sequence

from fetchsh.io import FetchOutput
from fetchsh.shell import FetchShell, FetchCommand


class FetchBuiltinHelp(FetchCommand):
    """Fetch built-in "help"."""

    def __init__(self, name: str = "help", enabled: bool = True) -> None:
        """Command definition.

        Args:
            name: Either "help" or "?".
            enabled: Whether the dispatcher will run this command.
        """
        super().__init__(name, "HELP:\thelp, ?", 0, enabled)

    def execute(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]],
        sh: FetchShell,
        out: FetchOutput,
    ) -> None:
        """Overrides FetchCommand.execute()."""
        out.write("Fetch commands:")
        for helpstring in self.helpstrings(sh):
            out.write(helpstring)

    def helpstrings(self, sh: FetchShell) -> List[str]:
        """Usage summaries of the enabled commands.

        Commands that share a usage summary (e.g. "help" and "?")
        are listed once.
        """
        helpstrings: List[str] = []
        for cmd in sh.commands:
            if (
                cmd.enabled
                and cmd.helpstring
                and cmd.helpstring not in helpstrings
            ):
                helpstrings.append(cmd.helpstring)
        return helpstrings
