# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Rich diagnostics for failed Fetch statements."""


from typing import Optional

from rich.style import StyleType
from rich.text import Text

from fetchsh.errors import FetchCommandNotFoundError, FetchError
from fetchsh.io import FetchOutput
from fetchsh.report import FetchReporter
from fetchsh.rich.theme import FetchTheme
from fetchsh.shell import FetchCommandError


class FetchRichReporter(FetchReporter):
    """Styled diagnostics."""

    @classmethod
    def mk_text(cls, content: str, style: Optional[StyleType] = None) -> Text:
        """Text view factory.

        Args:
            content: The text content.
            style: The text style, defaults to the theme's default.

        Returns:
            A new text view.
        """
        return Text(content, style=style or FetchTheme.STYLE_DEFAULT)

    def on_cmd_not_found_error(
        self, e: FetchCommandNotFoundError, out: FetchOutput
    ) -> None:
        """Overrides FetchReporter.on_cmd_not_found_error()."""
        out.write(
            Text.assemble(
                self.mk_text("fetch: command not found: "),
                self.mk_text(e.name, FetchTheme.STYLE_ERROR),
            )
        )

    def on_cmd_failed_error(
        self, e: FetchCommandError, out: FetchOutput
    ) -> None:
        """Overrides FetchReporter.on_cmd_failed_error()."""
        out.write(
            Text.assemble(
                self.mk_text(e.cmd.name, FetchTheme.STYLE_KEYWORD),
                self.mk_text(": "),
                self.mk_text(e.msg, FetchTheme.STYLE_ERROR),
            )
        )

    def on_statement_error(self, e: FetchError, out: FetchOutput) -> None:
        """Overrides FetchReporter.on_statement_error()."""
        out.write(
            Text.assemble(
                self.mk_text("fetch: "),
                self.mk_text(e.msg, FetchTheme.STYLE_WARNING),
            )
        )
