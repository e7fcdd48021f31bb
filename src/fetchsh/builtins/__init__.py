# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch interpreter built-in commands."""


from typing import List, Sequence

from fetchsh.shell import FetchCommand
from fetchsh.builtins.help import FetchBuiltinHelp
from fetchsh.builtins.gpio import FetchBuiltinGpio
from fetchsh.builtins.resetpins import FetchBuiltinResetPins
from fetchsh.builtins.version import FetchBuiltinVersion
from fetchsh.builtins.notyet import FetchBuiltinNotYet


def mk_builtins(disabled: Sequence[str] = ()) -> List[FetchCommand]:
    """Create the built-in commands, one per command keyword.

    Args:
        disabled: Keywords of the commands the dispatcher
          will refuse to run.

    Returns:
        The built-in commands.
    """
    disabled = [keyword.lower() for keyword in disabled]
    return [
        FetchBuiltinHelp("?", "?" not in disabled),
        FetchBuiltinHelp("help", "help" not in disabled),
        FetchBuiltinGpio("gpio" not in disabled),
        FetchBuiltinNotYet("adc", "adc" not in disabled),
        FetchBuiltinNotYet("spi", "spi" not in disabled),
        FetchBuiltinNotYet("i2c", "i2c" not in disabled),
        FetchBuiltinResetPins("resetpins" not in disabled),
        FetchBuiltinVersion("version" not in disabled),
    ]
