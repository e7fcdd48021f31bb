# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Rich output streams for the Fetch interpreter.

Rich output streams are based on the rich.console module.
"""


from typing import Any, Optional, IO

from rich.console import Console
from rich.theme import Theme

from fetchsh.io import FetchVT
from fetchsh.rich.theme import FetchTheme

_theme: FetchTheme = FetchTheme.getinstance()


class FetchRichVT(FetchVT):
    """Rich terminal for the Fetch interpreter."""

    _console: Console

    def __init__(self, file: Optional[IO[str]] = None) -> None:
        """Initialize VT.

        Args:
            file: The stream to write to, defaults to stdout.
        """
        super().__init__()
        # One line per write, plain strings are not markup.
        self._console = Console(
            file=file,
            theme=Theme(_theme.styles),
            highlight=False,
            markup=False,
            soft_wrap=True,
        )

    @property
    def console(self) -> Console:
        """The rich console this VT writes to."""
        return self._console

    def write(self, *args: Any, **kwargs: Any) -> None:
        """Write to rich console.

        Overrides FetchOutput.write().

        Args:
            *args: Positional arguments, Console.print() semantic.
            **kwargs: Keyword arguments, Console.print() semantic.
        """
        self._console.print(*args, **kwargs)

    def flush(self) -> None:
        """Flush rich console output without sending LF.

        Overrides FetchOutput.flush().
        """
        self._console.print("", end="")
