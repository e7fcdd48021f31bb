# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch built-in "gpio".

Read, write and configure GPIO pads:

    gpio:get:PORT:PIN
    gpio:set:PORT:PIN
    gpio:clear:PORT:PIN
    gpio:configure:PORT:PIN:DIRECTION:SENSE

Tokens are validated in order (action, port, pin, then direction and sense)
before the GPIO driver is called.

Unit tests and examples: tests/test_fetchsh_builtin_gpio.py
"""


from typing import Optional, Sequence

from fetchsh.errors import FetchErrorKind
from fetchsh.gpio import (
    GpioPort,
    GpioDirection,
    GpioSense,
    gpio_pin_from_name,
)
from fetchsh.io import FetchOutput
from fetchsh.shell import FetchShell, FetchCommand, FetchCommandError
from fetchsh.terminals import FetchTerminalSet


class FetchBuiltinGpio(FetchCommand):
    """Fetch built-in "gpio"."""

    # Command token positions.
    ACTION = 1
    PORT = 2
    PIN = 3
    DIRECTION = 4
    SENSE = 5

    def __init__(self, enabled: bool = True) -> None:
        super().__init__(
            "gpio",
            "GPIO:\tgpio:<get,set,clear,configure>:port:pin"
            ":<input,output>:<pullup,pulldown,floating,analog>",
            0,
            enabled,
        )

    def execute(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]],
        sh: FetchShell,
        out: FetchOutput,
    ) -> None:
        """Overrides FetchCommand.execute()."""
        action = self.resolve_tok(
            sh,
            cmd_toks,
            FetchBuiltinGpio.ACTION,
            sh.terminals.GPIO_SUBCOMMAND,
            FetchErrorKind.UNKNOWN_SUBCOMMAND,
        )
        port = GpioPort.from_name(
            self.resolve_tok(
                sh,
                cmd_toks,
                FetchBuiltinGpio.PORT,
                sh.terminals.PORT,
                FetchErrorKind.UNKNOWN_PORT,
            )
        )
        pin = gpio_pin_from_name(
            self.resolve_tok(
                sh,
                cmd_toks,
                FetchBuiltinGpio.PIN,
                sh.terminals.PIN,
                FetchErrorKind.UNKNOWN_PIN,
            )
        )

        if action == "get":
            out.write(f"{sh.gpio.read(port, pin):d}")
        elif action == "set":
            sh.gpio.set(port, pin)
        elif action == "clear":
            sh.gpio.clear(port, pin)
        elif action == "configure":
            self._configure(sh, cmd_toks, port, pin)
        else:
            raise FetchCommandError(
                self,
                FetchErrorKind.NOT_IMPLEMENTED,
                f"{action}: not implemented",
            )

    def resolve_tok(
        self,
        sh: FetchShell,
        cmd_toks: Sequence[str],
        pos: int,
        tset: FetchTerminalSet,
        kind: FetchErrorKind,
    ) -> str:
        """Resolve the command token at a grammar position.

        Args:
            sh: The interpreter context.
            cmd_toks: The statement's command tokens.
            pos: The token position.
            tset: The valid tokens at this position.
            kind: The error kind for an invalid token.

        Returns:
            The matched terminal.

        Raises:
            FetchCommandError: The token is missing or invalid.
        """
        if pos >= len(cmd_toks):
            raise FetchCommandError(
                self, FetchErrorKind.MISSING_ARGUMENT, f"missing {tset.name}"
            )
        tok = cmd_toks[pos]
        index = sh.match(tset, tok)
        if index is None:
            raise FetchCommandError(self, kind, f"{kind.value}: '{tok}'")
        return tset[index]

    def _configure(
        self,
        sh: FetchShell,
        cmd_toks: Sequence[str],
        port: GpioPort,
        pin: int,
    ) -> None:
        # Both direction and sense are required.
        if len(cmd_toks) <= FetchBuiltinGpio.SENSE:
            raise FetchCommandError(
                self,
                FetchErrorKind.MISSING_ARGUMENT,
                "configure: expects direction and sense",
            )

        direction = GpioDirection(
            self.resolve_tok(
                sh,
                cmd_toks,
                FetchBuiltinGpio.DIRECTION,
                sh.terminals.GPIO_DIRECTION,
                FetchErrorKind.UNKNOWN_DIRECTION,
            )
        )
        sense = GpioSense(
            self.resolve_tok(
                sh,
                cmd_toks,
                FetchBuiltinGpio.SENSE,
                sh.terminals.GPIO_SENSE,
                FetchErrorKind.UNKNOWN_SENSE,
            )
        )
        sh.gpio.configure(port, pin, direction, sense)
