# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the fetchsh.report and fetchsh.rich.report modules."""

# Relax pylint a bit for unit tests.
# pylint: disable=missing-function-docstring


import io

from fetchsh.report import FetchReporter
from fetchsh.rich.io import FetchRichVT
from fetchsh.rich.report import FetchRichReporter

from .fetchsh_uthelpers import FetchTests, FetchOutputBuffer


def test_fetchreporter_messages() -> None:
    sh = FetchTests.mk_shell()
    reporter = FetchReporter()
    out = FetchOutputBuffer()

    for line in [
        "help",
        "",
        "frobnicate",
        "(01)",
        "gpio:set:portz:pin0",
        "adc",
    ]:
        reporter.report(sh.execute(line), out)

    # Successful statements are not reported.
    assert out.lines == [
        "fetch: command not found: frobnicate",
        "fetch: no command (only data ?)",
        "gpio: unknown port: 'portz'",
        "adc: not implemented",
    ]


def test_fetchreporter_report() -> None:
    sh = FetchTests.mk_shell(disabled=["version"])
    reporter = FetchReporter()
    out = FetchOutputBuffer()

    reporter.report(sh.execute("help"), out)
    assert out.lines == []

    reporter.report(sh.execute("version"), out)
    reporter.report(sh.execute("gpio:set:portd:pin7(01)"), out)
    assert out.lines == [
        "version: command disabled",
        "gpio: too many data tokens (1 > 0)",
    ]


def test_fetchrichreporter_report() -> None:
    sh = FetchTests.mk_shell()
    stream = io.StringIO()
    vt = FetchRichVT(stream)
    reporter = FetchRichReporter()

    reporter.report(sh.execute("frobnicate"), vt)
    reporter.report(sh.execute("gpio:toggle:portd:pin7"), vt)
    reporter.report(sh.execute("gpio:get:portd(01"), vt)
    reporter.report(sh.execute("help"), vt)
    vt.flush()

    assert stream.getvalue().splitlines() == [
        "fetch: command not found: frobnicate",
        "gpio: unknown subcommand: 'toggle'",
        "fetch: missing ')'",
    ]
