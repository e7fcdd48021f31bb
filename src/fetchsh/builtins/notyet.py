# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Placeholder for the command families not yet implemented.

The "adc", "spi" and "i2c" keywords are valid commands,
but any statement that reaches them fails.
"""


from typing import Optional, Sequence

from fetchsh.errors import FetchErrorKind
from fetchsh.io import FetchOutput
from fetchsh.shell import FetchShell, FetchCommand, FetchCommandError


class FetchBuiltinNotYet(FetchCommand):
    """Command family not yet implemented."""

    def __init__(self, name: str, enabled: bool = True) -> None:
        """Command definition.

        Args:
            name: The command keyword, e.g. "adc".
            enabled: Whether the dispatcher will run this command.
        """
        super().__init__(name, "", 0, enabled)

    def execute(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]],
        sh: FetchShell,
        out: FetchOutput,
    ) -> None:
        """Overrides FetchCommand.execute()."""
        raise FetchCommandError(self, FetchErrorKind.NOT_IMPLEMENTED)
