# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch interpreter theme (aka rich styles).

Theme files are simple INI files named "theme.ini":

- the bundled theme file which sets the default appearance
- an optional user's theme file which customizes the defaults

The user's theme file is located in the configuration directory.

Unit tests and examples: tests/test_fetchsh_theme.py
"""


from typing import Optional, Dict, Mapping

import configparser
import os
import sys

from rich.errors import StyleError, StyleSyntaxError
from rich.style import Style
from rich.theme import Theme

from fetchsh.config import FetchConfig

_fetchconf: FetchConfig = FetchConfig.getinstance()


class FetchTheme:
    """Rich styles."""

    STYLE_DEFAULT = "fetch.default"
    STYLE_ERROR = "fetch.error"
    STYLE_WARNING = "fetch.warning"
    STYLE_KEYWORD = "fetch.keyword"

    class Error(BaseException):
        """Error loading styles file."""

    @classmethod
    def getinstance(cls) -> "FetchTheme":
        """Access the rich styles configuration instance."""
        return _fetchtheme

    # Rich styles.
    _styles: Dict[str, Style]

    def __init__(self, path: Optional[str] = None) -> None:
        """Initialize theme.

        If a theme path is explicitly set,
        only this theme file is loaded.

        Otherwise, proceed to default theme initialization:

        - 1st, load bundled theme file
        - then, load user's theme file to override defaults

        Args:
            path: Path to theme file,
              or None for default theme initialization.
        """
        self._styles = {}

        if path:
            self.load_theme_file(path, fail_early=True)
        else:
            path = os.path.join(os.path.dirname(__file__), "theme.ini")
            self.load_theme_file(path, fail_early=True)

            # Don't fault if the user's theme is unreadable or invalid.
            path = _fetchconf.get_user_file("theme.ini")
            if path and os.path.isfile(path):
                self.load_theme_file(path, fail_early=False)

    @property
    def styles(self) -> Mapping[str, Style]:
        """The theme's rich styles."""
        return self._styles

    def load_theme_file(self, path: str, fail_early: bool = True) -> None:
        """Load a rich styles file.

        Args:
            path: Path to a styles file.
            fail_early: If set, fault when we can't open the file for reading,
              or its content is invalid. This is the default.

        Raises:
            FetchTheme.Error: Failed to load styles file.
        """
        try:
            self._styles.update(Theme.read(path, encoding="utf-8").styles)
        except (
            OSError,
            StyleError,
            StyleSyntaxError,
            configparser.Error,
        ) as e:
            if isinstance(e, OSError):
                msg = e.strerror
            elif isinstance(e, configparser.Error):
                msg = e.message
            else:
                msg = str(e)
            if fail_early:
                raise FetchTheme.Error(msg) from e
            print(f"Failed to load theme file: {msg}", file=sys.stderr)


_fetchtheme = FetchTheme()
