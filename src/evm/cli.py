"""Command dispatcher: ``evm <command> [<args>]``.

Each invocation performs exactly one command. Every EvmError is printed
and turned into the abort exit code; ``plugin`` and ``start`` exit with
the status of the program they run.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from evm import __version__
from evm.app import AppContext, app_lifespan
from evm.errors import EvmError, InvalidOptionError
from evm.process import hand_off
from evm.settings import Settings, ensure_home, load_settings
from evm.tools.install import install_version
from evm.tools.list import current_version, list_versions
from evm.tools.plugin import manage_plugins
from evm.tools.remove import remove_version
from evm.tools.start import build_start_command
from evm.tools.use import use_version

logger = logging.getLogger(__name__)

ABORT_EXIT_CODE = 1

_DEFAULT_PROG = "evm"
_HELP_WORDS = frozenset({"help", "-h", "--help"})
_VERSION_WORDS = frozenset({"version", "--version"})

USAGE = """\
usage: {prog} <command> [<args>]

commands:
  install <version>             download and install an Elasticsearch version
  use <version>                 make an installed version the active one
  remove <version>              delete an installed version that is not active
  start [--config-path <dir>]   run the active version's server
  plugin [--install <name> | --remove <name>]
                                manage plugins of the active version (default: list)
  list                          list installed versions, * marks the active one
  which                         print the active version
  version                       print the {prog} version
  help                          show this message

environment:
  EVM_HOME        where versions are kept (default: ~/.{prog})
  EVM_LOG_LEVEL   log verbosity on stderr (default: WARNING)
"""


class _ArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise InvalidOptionError(f"{self.prog}: {message}")


def _build_parsers(prog: str) -> dict[str, argparse.ArgumentParser]:
    def new(command: str) -> _ArgumentParser:
        return _ArgumentParser(prog=f"{prog} {command}", add_help=False, allow_abbrev=False)

    parsers: dict[str, argparse.ArgumentParser] = {}
    for command in ("install", "use", "remove"):
        parser = new(command)
        parser.add_argument("version")
        parsers[command] = parser

    start = new("start")
    start.add_argument("--config-path", dest="config_path", default=None, metavar="DIR")
    parsers["start"] = start

    plugin = new("plugin")
    group = plugin.add_mutually_exclusive_group()
    group.add_argument("--install", metavar="NAME", default=None)
    group.add_argument("--remove", metavar="NAME", default=None)
    parsers["plugin"] = plugin

    parsers["list"] = new("list")
    parsers["which"] = new("which")
    return parsers


# ─── Command handlers ─────────────────────────────────────────


async def _cmd_install(app: AppContext, args: argparse.Namespace) -> int:
    result = await install_version(app, args.version)
    print(f"Installed {result.version} in {result.path}")
    if result.activated:
        print(f"Now using {result.version}")
    return 0


async def _cmd_use(app: AppContext, args: argparse.Namespace) -> int:
    version = use_version(app, args.version)
    print(f"Now using {version}")
    return 0


async def _cmd_remove(app: AppContext, args: argparse.Namespace) -> int:
    result = remove_version(app, args.version)
    print(f"Removed {result.version}")
    return 0


async def _cmd_plugin(app: AppContext, args: argparse.Namespace) -> int:
    if args.install is not None:
        return await manage_plugins(app, "install", args.install)
    if args.remove is not None:
        return await manage_plugins(app, "remove", args.remove)
    return await manage_plugins(app, "list")


async def _cmd_list(app: AppContext, args: argparse.Namespace) -> int:
    for entry in list_versions(app):
        marker = "*" if entry.active else " "
        print(f"{marker} {entry.version}")
    return 0


async def _cmd_which(app: AppContext, args: argparse.Namespace) -> int:
    version = current_version(app)
    if version is None:
        print("No version is active.", file=sys.stderr)
        return 0
    print(version)
    return 0


_Handler = Callable[[AppContext, argparse.Namespace], Awaitable[int]]

_HANDLERS: dict[str, _Handler] = {
    "install": _cmd_install,
    "use": _cmd_use,
    "remove": _cmd_remove,
    "plugin": _cmd_plugin,
    "list": _cmd_list,
    "which": _cmd_which,
}


async def _run(settings: Settings, command: str, args: argparse.Namespace) -> int:
    async with app_lifespan(settings) as app:
        return await _HANDLERS[command](app, args)


async def _prepare_start(settings: Settings, args: argparse.Namespace) -> list[str]:
    async with app_lifespan(settings) as app:
        return build_start_command(app, args.config_path)


# ─── Entry point ──────────────────────────────────────────────


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=logging.getLevelNamesMapping().get(level, logging.WARNING),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _print_usage(prog: str) -> None:
    print(USAGE.format(prog=prog), file=sys.stderr, end="")


def run_cli(argv: list[str] | None = None, prog: str | None = None) -> int:
    """Parse *argv*, run one command, and return the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    prog = prog or Path(sys.argv[0]).name or _DEFAULT_PROG

    settings = load_settings(prog)
    _configure_logging(settings.log_level)

    if not args or args[0] in _HELP_WORDS:
        _print_usage(prog)
        return ABORT_EXIT_CODE

    command, rest = args[0], args[1:]
    if command in _VERSION_WORDS:
        print(__version__)
        return 0

    parsers = _build_parsers(prog)
    parser = parsers.get(command)
    if parser is None:
        print(f"{prog}: unknown command '{command}'", file=sys.stderr)
        _print_usage(prog)
        return ABORT_EXIT_CODE

    logger.debug("Dispatching %s with %s (home %s)", command, rest, settings.home)
    try:
        parsed = parser.parse_args(rest)
        ensure_home(settings)
        if command == "start":
            cmd = asyncio.run(_prepare_start(settings, parsed))
            return hand_off(cmd)
        return asyncio.run(_run(settings, command, parsed))
    except EvmError as exc:
        print(f"{prog}: {exc}", file=sys.stderr)
        return ABORT_EXIT_CODE


if __name__ == "__main__":
    raise SystemExit(run_cli())
