# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch interpreter configuration.

The interpreter is configured by simple INI files named "fetchsh.ini":

- the bundled configuration file which sets the default configuration
- an optional user's configuration file which customizes the defaults

User-specific configuration files are stored into a
platform-dependent directory.

Unit tests and examples: tests/test_fetchsh_config.py
"""


from typing import List, Optional

import configparser
import codecs
import enum
import os
import re
import shutil
import sys


class FetchMatchPolicy(enum.Enum):
    """How candidate tokens are compared with grammar terminals.

    Valid values:

    - "exact": case-insensitive equality of the whole strings
    - "legacy": case-insensitive comparison of the first N characters,
      where N is the length of the longer string, capped at
      "match.max_strlen"
    """

    EXACT = "exact"
    """Whole string comparison."""

    LEGACY = "legacy"
    """Capped length comparison."""


class FetchConfig:
    """Fetch interpreter configuration."""

    class Error(BaseException):
        """Error loading configuration file."""

    @classmethod
    def getinstance(cls) -> "FetchConfig":
        """Access the preferences configuration instance."""
        return _fetchconf

    # RE for ASCII escape sequences that may appear in Python strings.
    # See FetchConfig.getstr().
    _RE_ESCAPE_SEQ: re.Pattern[str] = re.compile(
        r"""
    ( \\U........
    | \\u....
    | \\x..
    | \\[0-7]{1,3}
    | \\N\{[^}]+\}
    | \\[\\'"abfnrtv]
    )""",
        re.UNICODE | re.VERBOSE,
    )

    # Parsed configuration.
    _cfg: configparser.ConfigParser

    # Path to the per-user configuration directory.
    _app_dir: str

    def __init__(self, path: Optional[str] = None) -> None:
        """Initialize configuration.

        If a configuration path is explicitly set,
        only this configuration file is loaded.

        Otherwise, proceed to default configuration initialization:

        - 1st, load bundled default configuration file
        - then, load user's configuration file to customize defaults

        Args:
            path: Path to configuration file,
              or None for default configuration initialization.
        """
        self._init_app_dir()

        self._cfg = configparser.ConfigParser(
            interpolation=configparser.ExtendedInterpolation()
        )

        if path:
            self.load_ini_file(path)
        else:
            path = os.path.join(os.path.dirname(__file__), "fetchsh.ini")
            self.load_ini_file(path)
            path = self.get_user_file("fetchsh.ini")
            if os.path.isfile(path):
                self.load_ini_file(path)

    @property
    def app_dir(self) -> str:
        r"""Path to the per-user configuration directory.

        Location is platform-dependent:

        - POSIX: "$XDG_CONFIG_HOME/fetchsh", or "~/.config/fetchsh"
          if XDG_CONFIG_HOME is not set
        - Windows: "%LOCALAPPDATA%\FetchSh", or "~\AppData\Local\FetchSh"
        - macOS: "~/Library/FetchSh"

        The directory is not granted to exist.
        """
        return self._app_dir

    @property
    def limits_line_chars(self) -> int:
        """Maximum number of characters in an input line."""
        return self.getint("limits.line_chars", 256)

    @property
    def limits_cmd_toks(self) -> int:
        """Maximum number of colon separated command tokens."""
        return self.getint("limits.cmd_toks", 8)

    @property
    def limits_data_toks(self) -> int:
        """Maximum number of space separated data tokens."""
        return self.getint("limits.data_toks", 8)

    @property
    def match_policy(self) -> FetchMatchPolicy:
        """Comparison policy for the token matcher."""
        policy = self.getstr("match.policy")
        try:
            return FetchMatchPolicy(policy)
        except ValueError:
            print(f"match.policy: invalid policy '{policy}'", file=sys.stderr)
        return FetchMatchPolicy.EXACT

    @property
    def match_max_strlen(self) -> int:
        """Comparison length cap for the legacy match policy."""
        return self.getint("match.max_strlen", 25)

    @property
    def pref_disabled(self) -> List[str]:
        """Command keywords the dispatcher will refuse to run."""
        return self.getlist("pref.disabled")

    @property
    def pref_sparse(self) -> bool:
        """Whether to append an empty line after each command output."""
        return self.getbool("pref.sparse")

    def init_user_files(self) -> int:
        """Initialize per-user configuration files."""
        if not os.path.isdir(self._app_dir):
            try:
                os.makedirs(self._app_dir, mode=0o750)
            except OSError as e:
                print(
                    f"Failed to create directory: {self._app_dir}",
                    file=sys.stderr,
                )
                print(f"Cause: {e}", file=sys.stderr)

        if os.path.isdir(self._app_dir):
            src_dir = os.path.dirname(os.path.abspath(__file__))
            dst = self.get_user_file("fetchsh.ini")
            try:
                if os.path.exists(dst):
                    print(f"File exists, skipped: {dst}")
                else:
                    shutil.copyfile(os.path.join(src_dir, "fetchsh.ini"), dst)
                    print(f"User preferences: {dst}")

                dst = self.get_user_file("theme.ini")
                if os.path.exists(dst):
                    print(f"File exists, skipped: {dst}")
                else:
                    shutil.copyfile(
                        os.path.join(src_dir, "rich", "theme.ini"), dst
                    )
                    print(f"User theme: {dst}")

                return 0

            except OSError as e:
                print(f"Failed to create file: {dst}", file=sys.stderr)
                print(f"Cause: {e}", file=sys.stderr)

        # Per-user configuration files don't exist (-ENOENT).
        return -2

    def get_user_file(self, *paths: str) -> str:
        """Get path to a user file within the configuration directory.

        Args:
            paths: Relative path to the resource.
        """
        return os.path.join(self._app_dir, *paths)

    def getbool(self, option: str, fallback: bool = False) -> bool:
        """Access a configuration option's value as a boolean.

        Boolean:
        - True: '1', 'yes', 'true', and 'on'
        - False: '0', 'no', 'false', and 'off'

        Args:
            option: The option's name.
            fallback: The value for an undefined option or an invalid value.

        Returns:
            The option's value as a boolean.
        """
        try:
            return self._cfg.getboolean("fetchsh", option)
        except (configparser.Error, ValueError) as e:
            print(f"configuration error: {option}: {e}", file=sys.stderr)
        return fallback

    def getint(self, option: str, fallback: int = 0) -> int:
        """Access a configuration option's value as a integer.

        Base-2, -8, -10 and -16 are supported, the actual base
        is determined by the prefix "0b", "0o" or "0x".

        Args:
            option: The option's name.
            fallback: The value for an undefined option or an invalid value.

        Returns:
            The option's value as an integer.
        """
        try:
            return int(self._cfg.get("fetchsh", option), base=0)
        except (configparser.Error, ValueError) as e:
            print(f"configuration error: {option}: {e}", file=sys.stderr)
        return fallback

    def getstr(self, option: str, fallback: str = "") -> str:
        r"""Access a configuration option's value as wide string.

        Wide strings may contain actual Unicode characters,
        UTF-8 character literals (e.g. "\u276d"),
        or other ASCII escape sequences (e.g. "\t").

        Double-quotes are optional, excepted when the string value
        ends with trailing spaces.

        Args:
            option: The option's name.
            fallback: The value for an undefined option.

        Returns:
            The option's value as a wide string.
        """
        try:
            val = self._cfg.get("fetchsh", option).strip('"')
            val = val.replace("\n", " ")
            return str(
                FetchConfig._RE_ESCAPE_SEQ.sub(
                    lambda match: codecs.decode(
                        match.group(0), "unicode-escape"
                    ),
                    val,
                )
            )
        except configparser.Error as e:
            print(f"configuration error: {option}: {e}", file=sys.stderr)
        return fallback

    def getlist(self, option: str) -> List[str]:
        """Access a configuration option's value as a list of words.

        Words are separated by spaces or commas.

        Args:
            option: The option's name.

        Returns:
            The option's words, an empty list for an undefined option.
        """
        return [
            word for word in re.split(r"[\s,]+", self.getstr(option)) if word
        ]

    def load_ini_file(self, path: str) -> None:
        """Load options from configuration file (INI format).

        Overrides already loaded values with the same keys.

        Args:
            path: Path to a configuration file.

        Raises:
            FetchConfig.Error: Failed to load configuration file.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                self._cfg.read_file(f)
        except (OSError, configparser.Error) as e:
            raise FetchConfig.Error(str(e)) from e

    def _init_app_dir(self) -> None:
        if sys.platform == "darwin":
            self._app_dir = os.path.abspath(
                os.path.join(os.path.expanduser("~"), "Library", "FetchSh")
            )
        elif os.name == "nt":
            local_app_data = os.environ.get(
                "LOCALAPPDATA",
                os.path.join(os.path.expanduser("~"), "AppData", "Local"),
            )
            self._app_dir = os.path.abspath(
                os.path.join(local_app_data, "FetchSh")
            )
        else:
            xdg_cfg_home = os.environ.get(
                "XDG_CONFIG_HOME",
                os.path.join(os.path.expanduser("~"), ".config"),
            )
            self._app_dir = os.path.abspath(
                os.path.join(xdg_cfg_home, "fetchsh")
            )


_fetchconf = FetchConfig()
