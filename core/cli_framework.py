"""CLI application framework for the Outlook assistant.

Provides a declarative way to build CLI applications with:
- Command registration via decorators
- Automatic argument parsing
- Consistent error handling (text on stderr, or a JSON error object)
- Output formatting
- Common arguments (--profile, --dry-run, --verbose, --output/--json, --log-file)
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Sequence,
)

from .applog import AppLogger
from .cli_errors import ExitCode, handle_error
from .cli_output import OutputConfig, OutputFormat, OutputWriter

CommandFunc = Callable[[argparse.Namespace], int]

LOG_FILE_ENV = "OUTLOOK_ASSISTANT_LOG"


@dataclass
class Argument:
    """Definition of a CLI argument."""
    name_or_flags: tuple
    kwargs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommandDef:
    """Definition of a CLI command."""
    name: str
    func: CommandFunc
    help: str = ""
    description: str = ""
    arguments: List[Argument] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)


def add_common_arguments(parser: argparse.ArgumentParser, *, suppress: bool = False) -> None:
    """Add the flags every command accepts.

    With ``suppress`` the flags default to ``argparse.SUPPRESS`` so a value
    given before the command name is not clobbered by the subparser.
    """
    def _default(value: Any) -> Any:
        return argparse.SUPPRESS if suppress else value

    parser.add_argument("--profile", "-p", default=_default(None), help="Credentials profile name")
    parser.add_argument(
        "--verbose", "-v", action="store_true", default=_default(False),
        help="Enable verbose output and debug logging",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", default=_default(False),
        help="Suppress non-essential output",
    )
    parser.add_argument(
        "--dry-run", action="store_true", default=_default(False),
        help="Preview changes without applying them",
    )
    parser.add_argument(
        "--output", "-o",
        choices=[f.value for f in OutputFormat],
        default=_default("text"),
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--json", dest="output", action="store_const", const="json", default=_default("text"),
        help="Shorthand for --output json",
    )
    parser.add_argument(
        "--log-file", default=_default(None),
        help=f"Append a JSON-lines session log here (env: {LOG_FILE_ENV})",
    )


class CLIApp:
    """Base class for CLI applications.

    Example usage:
        app = CLIApp("outlook-assistant", "Outlook calendar and mail helper")

        @app.command("freebusy", help="Show busy times")
        @app.argument("--date", help="Day to inspect")
        def cmd_freebusy(args):
            ...
            return 0

        if __name__ == "__main__":
            app.main()
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        version: Optional[str] = None,
        epilog: Optional[str] = None,
        add_common_args: bool = True,
    ):
        self.name = name
        self.description = description
        self.version = version
        self.epilog = epilog
        self.add_common_args = add_common_args

        self._commands: Dict[str, CommandDef] = {}
        self._parser: Optional[argparse.ArgumentParser] = None
        self._pending_arguments: List[Argument] = []
        self._shared_arguments: List[Argument] = []

    def command(
        self,
        name: str,
        *,
        help: str = "",
        description: str = "",
        aliases: Optional[List[str]] = None,
    ) -> Callable[[CommandFunc], CommandFunc]:
        """Decorator to register a command.

        Collects every ``@app.argument`` applied beneath it.
        """
        def decorator(func: CommandFunc) -> CommandFunc:
            arguments = list(reversed(self._pending_arguments))
            self._pending_arguments.clear()
            self._commands[name] = CommandDef(
                name=name,
                func=func,
                help=help,
                description=description or help,
                arguments=arguments,
                aliases=aliases or [],
            )
            return func
        return decorator

    def argument(
        self,
        *name_or_flags: str,
        **kwargs: Any,
    ) -> Callable[[CommandFunc], CommandFunc]:
        """Decorator to add an argument to the next command.

        Must be used BEFORE the @command decorator (decorators apply bottom-up).
        """
        def decorator(func: CommandFunc) -> CommandFunc:
            self._pending_arguments.append(Argument(name_or_flags, kwargs))
            return func
        return decorator

    def shared_argument(self, *name_or_flags: str, **kwargs: Any) -> None:
        """Register an argument that every command accepts (e.g. auth flags)."""
        self._shared_arguments.append(Argument(name_or_flags, kwargs))

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser."""
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.description,
            epilog=self.epilog,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        if self.version:
            parser.add_argument(
                "--version", "-V",
                action="version",
                version=f"%(prog)s {self.version}",
            )

        if self.add_common_args:
            add_common_arguments(parser)

        if self._commands:
            subparsers = parser.add_subparsers(dest="command", metavar="<command>")
            for cmd_def in self._commands.values():
                cmd_parser = subparsers.add_parser(
                    cmd_def.name,
                    help=cmd_def.help,
                    description=cmd_def.description,
                    aliases=cmd_def.aliases,
                )
                if self.add_common_args:
                    add_common_arguments(cmd_parser, suppress=True)
                self._add_command_arguments(cmd_parser, cmd_def)
                cmd_parser.set_defaults(_cmd_func=cmd_def.func)

        self._parser = parser
        return parser

    def _add_command_arguments(
        self,
        parser: argparse.ArgumentParser,
        cmd_def: CommandDef,
    ) -> None:
        """Add shared and command-specific arguments to the parser."""
        for arg in self._shared_arguments + cmd_def.arguments:
            parser.add_argument(*arg.name_or_flags, **arg.kwargs)

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Run the CLI application.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:]).

        Returns:
            Exit code.
        """
        parser = self._parser
        if parser is None:
            parser = self.build_parser()
        args = parser.parse_args(argv)

        verbose = bool(getattr(args, "verbose", False))
        output_format = OutputFormat(getattr(args, "output", None) or "text")
        args._output = OutputWriter(OutputConfig(
            format=output_format,
            verbose=verbose,
            quiet=bool(getattr(args, "quiet", False)),
        ))
        if verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                stream=sys.stderr,
                format="%(levelname)s %(name)s: %(message)s",
            )

        cmd_func = getattr(args, "_cmd_func", None)
        if cmd_func is None:
            parser.print_help()
            return ExitCode.USAGE

        log_path = getattr(args, "log_file", None) or os.environ.get(LOG_FILE_ENV)
        if not log_path:
            return self._dispatch(cmd_func, args)
        logger = AppLogger(os.path.expanduser(log_path))
        with logger.session(str(getattr(args, "command", "")), list(argv) if argv is not None else sys.argv[1:]) as rec:
            code = self._dispatch(cmd_func, args)
            rec.set_exit_code(int(code))
            return code

    def _dispatch(self, cmd_func: CommandFunc, args: argparse.Namespace) -> int:
        verbose = bool(getattr(args, "verbose", False))
        as_json = args._output.config.format == OutputFormat.JSON
        try:
            return int(cmd_func(args))
        except KeyboardInterrupt as e:
            return handle_error(e)
        except Exception as e:
            return handle_error(e, verbose=verbose, as_json=as_json)

    def main(self, argv: Optional[Sequence[str]] = None) -> None:
        """Run the CLI and exit with the return code."""
        sys.exit(self.run(argv))
