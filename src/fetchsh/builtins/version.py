# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch built-in "version".

Print the interpreter version.
"""


from typing import Optional, Sequence

from fetchsh.io import FetchOutput
from fetchsh.shell import FetchShell, FetchCommand


class FetchBuiltinVersion(FetchCommand):
    """Fetch built-in "version"."""

    def __init__(self, enabled: bool = True) -> None:
        super().__init__("version", "VERSION:\tversion", 0, enabled)

    def execute(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]],
        sh: FetchShell,
        out: FetchOutput,
    ) -> None:
        """Overrides FetchCommand.execute()."""
        out.write(f"fetchsh {FetchShell.VERSION_STRING}")
