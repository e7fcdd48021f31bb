# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Fetch interpreter CLI.

Run Fetch statements against the simulated GPIO driver:

- from the command line (-c, may be repeated)
- from a batch file (-f)
- from stdin, until EOF
"""

from typing import cast, Optional, Union, List

import argparse
import logging
import sys

from fetchsh.config import FetchConfig
from fetchsh.session import FetchSession
from fetchsh.rich.io import FetchRichVT
from fetchsh.rich.report import FetchRichReporter
from fetchsh.rich.theme import FetchTheme


class FetchArgvParser(argparse.ArgumentParser):
    """Command line arguments parser."""

    @staticmethod
    def init(parser: argparse.ArgumentParser) -> None:
        """Add fetchsh command line arguments to parser."""
        grp_user_files = parser.add_argument_group("user files")
        grp_user_files.add_argument(
            "-u",
            "--user-files",
            help="initialize per-user configuration files and exit",
            action="store_true",
        )
        grp_user_files.add_argument(
            "--preferences",
            help="load additional preferences file",
            metavar="FILE",
        )
        grp_user_files.add_argument(
            "--theme",
            help="load additional styles file",
            metavar="FILE",
        )

        grp_session_ctrl = parser.add_argument_group("session control")
        grp_session_ctrl.add_argument(
            "-c",
            help="execute STATEMENT (may be repeated)",
            action="append",
            metavar="STATEMENT",
        )
        grp_session_ctrl.add_argument(
            "-f",
            help="execute batch statements from FILE",
            metavar="FILE",
        )
        grp_session_ctrl.add_argument(
            "--plain",
            help="plain text output",
            action="store_true",
        )
        grp_session_ctrl.add_argument(
            "--debug",
            help="log debug traces to stderr",
            action="store_true",
        )

    def __init__(self) -> None:
        """Initialize a default parser with fetchsh arguments."""
        super().__init__(
            prog="fetchsh",
            description="Fetch language interpreter",
            allow_abbrev=False,
        )
        FetchArgvParser.init(self)


class FetchCliArgs:
    """Parsed command line arguments."""

    _args: argparse.Namespace

    def __init__(self, args: argparse.Namespace) -> None:
        """Initialize arguments.

        Args:
            args: Parsed command line arguments as defined
              by ArgumentParser.parse_args().
        """
        self._args = args

    @property
    def user_files(self) -> bool:
        """Initialize user files and exit."""
        return bool(self._args.user_files)

    @property
    def preferences(self) -> Optional[str]:
        """Additional preferences file."""
        if self._args.preferences:
            return cast(str, self._args.preferences)
        return None

    @property
    def theme(self) -> Optional[str]:
        """Additional styles file."""
        if self._args.theme:
            return cast(str, self._args.theme)
        return None

    @property
    def batch_source(self) -> Optional[Union[str, List[str]]]:
        """Batch statements source, None for stdin."""
        if self._args.c:
            return cast(List[str], self._args.c)
        if self._args.f:
            return cast(str, self._args.f)
        return None

    @property
    def plain(self) -> bool:
        """Whether to disable rich output."""
        return bool(self._args.plain)

    @property
    def debug(self) -> bool:
        """Whether to log debug traces."""
        return bool(self._args.debug)


class FetchCli:
    """Command line interface."""

    class Error(BaseException):
        """Failed to start the interpreter."""

    _parser: argparse.ArgumentParser

    def __init__(
        self, parser: Optional[argparse.ArgumentParser] = None
    ) -> None:
        """Initialize CLI.

        Args:
            parser: If set, specify an existing parser to configure with
              fetchsh command line arguments.
              If unset, the default parser is used.
        """
        if parser:
            self._parser = parser
            FetchArgvParser.init(self._parser)
        else:
            self._parser = FetchArgvParser()

    def run(self, args: Optional[argparse.Namespace] = None) -> int:
        """Run the command line interface.

        Args:
            args: Parsed arguments.
              If unset, get the command line arguments with the default parser.

        Returns:
            The process exit status.

        Raises:
            FetchCli.Error: Invalid preferences, theme or batch file.
        """
        if args is None:
            args = self._parser.parse_args()
        if args.f and args.c:
            self._parser.error("-c and -f are mutually exclusive")

        cli_args = FetchCliArgs(args)

        if cli_args.debug:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(levelname)s %(name)s: %(message)s",
                stream=sys.stderr,
            )

        if cli_args.user_files:
            return FetchConfig.getinstance().init_user_files()

        try:
            if cli_args.preferences:
                FetchConfig.getinstance().load_ini_file(cli_args.preferences)
            if cli_args.theme:
                FetchTheme.getinstance().load_theme_file(cli_args.theme)
            if cli_args.plain:
                session = FetchSession.create(cli_args.batch_source)
            else:
                session = FetchSession.create(
                    cli_args.batch_source,
                    vt=FetchRichVT(),
                    reporter=FetchRichReporter(),
                )
        except (FetchConfig.Error, FetchTheme.Error, FetchSession.Error) as e:
            raise FetchCli.Error(str(e)) from e

        return session.run()


def run() -> None:
    """Installed entry point."""
    cli = FetchCli()

    try:
        status = cli.run()
    except FetchCli.Error as e:
        print(f"fetchsh: error: {e}", file=sys.stderr)
        sys.exit(2)

    sys.exit(status)


if __name__ == "__main__":
    run()
