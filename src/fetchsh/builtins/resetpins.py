# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch built-in "resetpins".

Restore all GPIO pads to their default configuration.
"""


from typing import Optional, Sequence

import logging

from fetchsh.io import FetchOutput
from fetchsh.shell import FetchShell, FetchCommand

logger = logging.getLogger(__name__)


class FetchBuiltinResetPins(FetchCommand):
    """Fetch built-in "resetpins"."""

    def __init__(self, enabled: bool = True) -> None:
        super().__init__("resetpins", "RESETPINS:\tresetpins", 0, enabled)

    def execute(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]],
        sh: FetchShell,
        out: FetchOutput,
    ) -> None:
        """Overrides FetchCommand.execute()."""
        logger.debug("resetting pins")
        sh.gpio.reset_all()
