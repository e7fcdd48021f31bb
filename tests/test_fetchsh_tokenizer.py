# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the fetchsh.tokenizer module."""

# Relax pylint a bit for unit tests.
# pylint: disable=missing-function-docstring


import pytest

from fetchsh.errors import (
    FetchErrorKind,
    FetchSyntaxError,
    FetchTooManyTokensError,
)
from fetchsh.tokenizer import FetchStatement, FetchTokenizer


def test_fetchstatement() -> None:
    statement = FetchStatement(["gpio", "get"], ["01"])
    assert statement.cmd_toks == ("gpio", "get")
    assert statement.data_toks == ("01",)
    assert statement.keyword == "gpio"
    assert not statement.is_blank
    assert statement == FetchStatement(("gpio", "get"), ("01",))
    assert statement != FetchStatement(("gpio", "get"))

    blank = FetchStatement(())
    assert blank.keyword is None
    assert blank.data_toks is None
    assert blank.is_blank


def test_fetchtokenizer_limits() -> None:
    tokenizer = FetchTokenizer()
    assert tokenizer.max_line_chars == 256
    assert tokenizer.max_cmd_toks == 8
    assert tokenizer.max_data_toks == 8


def test_fetchtokenizer_cmd_segment() -> None:
    tokenizer = FetchTokenizer()
    assert tokenizer.tokenize("help") == FetchStatement(("help",))
    assert tokenizer.tokenize("gpio:set:portd:pin7\n") == FetchStatement(
        ("gpio", "set", "portd", "pin7")
    )
    # End-of-line in either convention.
    assert tokenizer.tokenize("gpio:set:portd:pin7\r\n") == FetchStatement(
        ("gpio", "set", "portd", "pin7")
    )
    # Whitespace is not significant within the command segment.
    assert tokenizer.tokenize(" gpio : set:port d\t:pin7 ") == FetchStatement(
        ("gpio", "set", "portd", "pin7")
    )
    # Case is preserved.
    assert tokenizer.tokenize("GPIO:Get").cmd_toks == ("GPIO", "Get")
    # Empty tokens are dropped.
    assert tokenizer.tokenize("gpio::set:").cmd_toks == ("gpio", "set")
    assert tokenizer.tokenize(":help").cmd_toks == ("help",)


def test_fetchtokenizer_blank() -> None:
    tokenizer = FetchTokenizer()
    for line in ["", "\n", "\r\n", "   ", " \t \n"]:
        statement = tokenizer.tokenize(line)
        assert statement.is_blank
        assert statement.data_toks is None


def test_fetchtokenizer_data_segment() -> None:
    tokenizer = FetchTokenizer()
    assert tokenizer.tokenize("spi:write").data_toks is None
    assert tokenizer.tokenize("spi:write()").data_toks == ()
    assert tokenizer.tokenize("spi:write( )\n").data_toks == ()
    assert tokenizer.tokenize("spi:write(01 0a)").data_toks == ("01", "0a")
    assert tokenizer.tokenize("spi:write (01\t0a  ) \n").data_toks == (
        "01",
        "0a",
    )
    # Data tokens are not validated.
    assert tokenizer.tokenize("spi:write(xyz)").data_toks == ("xyz",)
    statement = tokenizer.tokenize("spi:write(01)")
    assert statement.cmd_toks == ("spi", "write")


def test_fetchtokenizer_syntax_errors() -> None:
    tokenizer = FetchTokenizer()
    for line in [
        "(",
        "(\n",
        "(01 02)",
        " (01)",
        ":(01)",
        ":",
        ":: \n",
        "spi:write(01",
        "spi:write(01)x",
        "spi:write(01)(02)",
    ]:
        with pytest.raises(FetchSyntaxError) as e:
            tokenizer.tokenize(line)
        assert e.value.kind is FetchErrorKind.SYNTAX


def test_fetchtokenizer_line_too_long() -> None:
    tokenizer = FetchTokenizer(max_line_chars=8)
    assert tokenizer.tokenize("12345678\r\n").cmd_toks == ("12345678",)
    with pytest.raises(FetchSyntaxError):
        tokenizer.tokenize("123456789")

    tokenizer = FetchTokenizer()
    assert tokenizer.tokenize("a" * 256).cmd_toks == ("a" * 256,)
    with pytest.raises(FetchSyntaxError):
        tokenizer.tokenize("a" * 257)


def test_fetchtokenizer_too_many_tokens() -> None:
    tokenizer = FetchTokenizer()
    line = ":".join(["t"] * 8)
    assert len(tokenizer.tokenize(line).cmd_toks) == 8

    line = ":".join(["t"] * 9)
    with pytest.raises(FetchTooManyTokensError) as e:
        tokenizer.tokenize(line)
    assert e.value.kind is FetchErrorKind.TOO_MANY_TOKENS
    assert e.value.segment == "command"
    assert e.value.count == 9
    assert e.value.limit == 8

    line = "spi:write({})".format(" ".join(["00"] * 8))
    assert len(tokenizer.tokenize(line).data_toks or ()) == 8

    line = "spi:write({})".format(" ".join(["00"] * 9))
    with pytest.raises(FetchTooManyTokensError) as e:
        tokenizer.tokenize(line)
    assert e.value.segment == "data"
    assert e.value.count == 9

    tokenizer = FetchTokenizer(max_cmd_toks=2, max_data_toks=1)
    with pytest.raises(FetchTooManyTokensError):
        tokenizer.tokenize("gpio:get:portd")
    with pytest.raises(FetchTooManyTokensError):
        tokenizer.tokenize("spi(01 02)")
