# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the fetchsh.shell module."""

# Relax pylint a bit for unit tests.
# pylint: disable=missing-function-docstring
# pylint: disable=missing-class-docstring


from typing import List, Optional, Sequence

import pytest

from fetchsh.config import FetchMatchPolicy
from fetchsh.errors import FetchCommandNotFoundError, FetchErrorKind
from fetchsh.gpio import GpioDirection, GpioPort, GpioSense
from fetchsh.io import FetchOutput
from fetchsh.shell import (
    FetchCommand,
    FetchCommandError,
    FetchDispatchTable,
    FetchResult,
    FetchShell,
)
from fetchsh.terminals import FetchTerminals
from fetchsh.tokenizer import FetchStatement
from fetchsh.builtins import mk_builtins
from fetchsh.builtins.gpio import FetchBuiltinGpio
from fetchsh.builtins.help import FetchBuiltinHelp

from .fetchsh_uthelpers import FetchTests, FetchGpioSpy, FetchOutputBuffer


class FetchCommandWithData(FetchCommand):
    data: List[Optional[Sequence[str]]]

    def __init__(self, name: str, max_data_bytes: int) -> None:
        super().__init__(name, "", max_data_bytes)
        self.data = []

    def execute(
        self,
        cmd_toks: Sequence[str],
        data_toks: Optional[Sequence[str]],
        sh: FetchShell,
        out: FetchOutput,
    ) -> None:
        self.data.append(data_toks)


def mk_shell_with_data(cmd: FetchCommandWithData) -> FetchShell:
    builtins = [
        cmd if builtin.name == cmd.name else builtin
        for builtin in mk_builtins()
    ]
    return FetchShell(FetchGpioSpy(), builtins)


def test_fetchcommand() -> None:
    cmd = FetchCommand("adc", "ADC:\tadc", 4)
    assert cmd.name == "adc"
    assert cmd.helpstring == "ADC:\tadc"
    assert cmd.max_data_bytes == 4
    assert cmd.enabled
    # Base implementation does nothing.
    cmd.execute(["adc"], None, FetchTests.mk_shell(), FetchOutput())

    assert cmd == FetchCommand("adc", "")
    assert cmd != FetchCommand("spi", "")
    # Commands are identified by name, not ordered.
    with pytest.raises(TypeError):
        sorted([FetchCommand("spi", ""), FetchCommand("adc", "")])
    assert len({cmd, FetchCommand("adc", "")}) == 1


def test_fetchdispatchtable() -> None:
    table = FetchDispatchTable(FetchTerminals.COMMAND, mk_builtins())
    assert len(table) == len(FetchTerminals.COMMAND)
    assert list(table) == list(FetchTerminals.COMMAND)
    assert [cmd.name for cmd in table.commands] == list(FetchTerminals.COMMAND)
    assert table.keywords is FetchTerminals.COMMAND
    assert isinstance(table["gpio"], FetchBuiltinGpio)
    assert table.at(2) is table["gpio"]
    assert "version" in table
    assert "frobnicate" not in table


def test_fetchdispatchtable_invalid() -> None:
    builtins = mk_builtins()

    # Each keyword is bound to exactly one command.
    with pytest.raises(KeyError):
        FetchDispatchTable(FetchTerminals.COMMAND, builtins[1:])
    with pytest.raises(ValueError):
        FetchDispatchTable(
            FetchTerminals.COMMAND, [*builtins, FetchBuiltinHelp("help")]
        )
    # Commands are named after keywords.
    with pytest.raises(ValueError):
        FetchDispatchTable(
            FetchTerminals.COMMAND, [*builtins, FetchCommand("frob", "")]
        )
    with pytest.raises(KeyError):
        FetchShell(FetchGpioSpy(), [FetchBuiltinHelp("help")])


def test_fetchdispatchtable_immutable() -> None:
    sh = FetchTests.mk_shell()
    with pytest.raises(TypeError):
        sh.table["frob"] = FetchCommand("frob", "")  # type: ignore[index]
    assert len(sh.table) == len(FetchTerminals.COMMAND)


def test_fetchresult() -> None:
    result = FetchResult(FetchStatement(("help",)))
    assert result
    assert result.ok
    assert result.error is None
    assert result.kind is None

    error = FetchCommandError(
        FetchCommand("adc", ""), FetchErrorKind.NOT_IMPLEMENTED
    )
    result = FetchResult(
        FetchStatement(("adc",)), FetchCommand("adc", ""), error
    )
    assert not result
    assert not result.ok
    assert result.error is error
    assert result.kind is FetchErrorKind.NOT_IMPLEMENTED
    assert result.cmd == FetchCommand("adc", "")
    assert error.msg == "not implemented"


def test_fetchshell_create() -> None:
    gpio = FetchGpioSpy()
    sh = FetchShell.create(gpio, disabled=["spi"])
    assert sh.gpio is gpio
    assert sh.terminals is FetchTerminals.getinstance()
    assert len(sh.commands) == len(FetchTerminals.COMMAND)
    assert not sh.table["spi"].enabled
    assert sh.table["adc"].enabled


def test_fetchshell_find_command() -> None:
    sh = FetchTests.mk_shell()
    assert sh.find_command("help") is sh.table["help"]
    assert sh.find_command("HELP") is sh.table["help"]
    assert sh.find_command("?") is sh.table["?"]
    with pytest.raises(FetchCommandNotFoundError) as e:
        sh.find_command("frobnicate")
    assert e.value.name == "frobnicate"
    assert e.value.kind is FetchErrorKind.UNKNOWN_COMMAND


def test_fetchshell_execute_gpio() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)

    result = sh.execute("gpio:set:portd:pin7\n")
    assert result
    assert result.statement == FetchStatement(("gpio", "set", "portd", "pin7"))
    assert isinstance(result.cmd, FetchBuiltinGpio)
    assert gpio.calls == [("set", GpioPort.D, 7)]

    gpio.calls.clear()
    assert sh.execute("gpio:configure:portd:pin7:input:floating\n")
    assert gpio.calls == [
        (
            "configure",
            GpioPort.D,
            7,
            GpioDirection.INPUT,
            GpioSense.FLOATING,
        )
    ]


def test_fetchshell_execute_case_insensitive() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)
    assert sh.execute("GPIO:Set:PortD:PIN7")
    assert sh.execute("gpio:set:portd:pin7")
    assert gpio.calls == [("set", GpioPort.D, 7), ("set", GpioPort.D, 7)]


def test_fetchshell_execute_blank() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)
    for line in ["", "\n", "   \t\n"]:
        result = sh.execute(line)
        assert result
        assert result.statement and result.statement.is_blank
        assert result.cmd is None
    assert gpio.calls == []


def test_fetchshell_execute_syntax_error() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)
    result = sh.execute("(\n")
    assert not result
    assert result.kind is FetchErrorKind.SYNTAX
    assert result.statement is None
    assert result.cmd is None
    assert gpio.calls == []


def test_fetchshell_execute_too_many_tokens() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)
    # Tokens are discarded, the command is not dispatched.
    result = sh.execute("gpio:set:portd:pin7:a:b:c:d:e\n")
    assert result.kind is FetchErrorKind.TOO_MANY_TOKENS
    assert result.statement is None
    assert gpio.calls == []


def test_fetchshell_execute_unknown_command() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)
    keywords = list(sh.table)

    result = sh.execute("frobnicate\n")
    assert result.kind is FetchErrorKind.UNKNOWN_COMMAND
    assert isinstance(result.error, FetchCommandNotFoundError)
    assert result.error.name == "frobnicate"
    assert result.cmd is None
    # No abbreviations.
    assert sh.execute("ver").kind is FetchErrorKind.UNKNOWN_COMMAND
    assert sh.execute("helpme").kind is FetchErrorKind.UNKNOWN_COMMAND
    # The dispatch table is left untouched.
    assert list(sh.table) == keywords
    assert gpio.calls == []


def test_fetchshell_execute_idempotent() -> None:
    sh = FetchTests.mk_shell()
    out = FetchOutputBuffer()
    assert sh.execute("gpio:get:portd:pin7\n", out)
    assert sh.execute("gpio:get:portd:pin7\n", out)
    assert out.lines == ["0", "0"]


def test_fetchshell_execute_disabled() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio, disabled=["RESETPINS"])
    result = sh.execute("resetpins\n")
    assert result.kind is FetchErrorKind.COMMAND_DISABLED
    assert result.cmd is sh.table["resetpins"]
    assert gpio.calls == []


def test_fetchshell_execute_data() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)
    # An empty data segment is always accepted.
    assert sh.execute("gpio:set:portd:pin7()")
    assert gpio.calls == [("set", GpioPort.D, 7)]

    gpio.calls.clear()
    result = sh.execute("gpio:set:portd:pin7(01)")
    assert result.kind is FetchErrorKind.TOO_MANY_TOKENS
    assert result.cmd is sh.table["gpio"]
    assert gpio.calls == []


def test_fetchshell_execute_data_bytes() -> None:
    cmd = FetchCommandWithData("adc", 2)
    sh = mk_shell_with_data(cmd)

    assert sh.execute("adc(0e 9A)")
    assert sh.execute("adc")
    assert cmd.data == [("0e", "9A"), None]

    cmd.data.clear()
    assert sh.execute("adc(01 02 03)").kind is FetchErrorKind.TOO_MANY_TOKENS
    assert sh.execute("adc(01 ff)").kind is FetchErrorKind.INVALID_DATA
    assert sh.execute("adc(1)").kind is FetchErrorKind.INVALID_DATA
    assert sh.execute("adc(012)").kind is FetchErrorKind.INVALID_DATA
    assert cmd.data == []


def test_fetchshell_dispatch() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)
    assert sh.dispatch(["gpio", "clear", "portb", "pin0"])
    assert gpio.calls == [("clear", GpioPort.B, 0)]
    assert sh.dispatch([])
    assert sh.dispatch(["nope"]).kind is FetchErrorKind.UNKNOWN_COMMAND


def test_fetchshell_legacy_policy() -> None:
    gpio = FetchGpioSpy()
    sh = FetchTests.mk_shell(gpio)
    result = sh.execute("gpio:conf:portd:pin7:input:floating")
    assert result.kind is FetchErrorKind.UNKNOWN_SUBCOMMAND

    sh = FetchTests.mk_shell(
        gpio, policy=FetchMatchPolicy.LEGACY, max_strlen=4
    )
    assert sh.matcher.policy is FetchMatchPolicy.LEGACY
    assert sh.execute("gpio:conf:porta:pin7:inpu:floa")
    assert gpio.calls == [
        (
            "configure",
            GpioPort.A,
            7,
            GpioDirection.INPUT,
            GpioSense.FLOATING,
        )
    ]
