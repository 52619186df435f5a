"""CLI entry point for repohome."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from repohome import __version__
from repohome import git
from repohome.config import (
    Config,
    Setup,
    config_file,
    load_config,
    repo_dir,
    select_setup,
    write_default_config,
)
from repohome.errors import ConfigError, EmptyRepoPath, RepohomeError, UnsupportedKind
from repohome.layout import clone_destination, compose, normalize_clone_path, path_segments
from repohome.listing import collect, find_target, render_table, rows_to_json
from repohome.locator import parse
from repohome.messages import Messages, detect_locale
from repohome.theme import CYAN, MUTED, error_text, render_banner

logger = logging.getLogger(__name__)


@dataclass
class Context:
    """Everything a command needs; built once per run."""

    setup: Setup
    config: Config
    messages: Messages
    console: Console
    err_console: Console

    def config_file(self) -> Path:
        return config_file(self.setup)

    def repo_dir(self) -> Path:
        return repo_dir(self.setup, self.config)

    def say(self, key: str, **params: object) -> None:
        self.console.print(self.messages.format(key, **params), style=MUTED, markup=False, highlight=False, soft_wrap=True)


def _check_kind(kind: str) -> None:
    if kind not in git.SUPPORTED_KINDS:
        raise UnsupportedKind(kind)


def _check_status(ctx: Context, code: int) -> int:
    if code != 0:
        ctx.err_console.print(error_text(ctx.messages.format("error-git-failed", code=code)), soft_wrap=True)
    return code


# ── Commands ────────────────────────────────────────────────────────────

def cmd_clone(ctx: Context, args: argparse.Namespace) -> int:
    _check_kind(args.type)
    locator = parse(args.target)
    if not path_segments(normalize_clone_path(locator)):
        raise EmptyRepoPath(args.target)
    dest = clone_destination(ctx.repo_dir(), locator, args.type)
    logger.debug("parsed %r as %r", args.target, locator)
    ctx.say("info-cloning", target=args.target, path=dest)
    return _check_status(ctx, git.clone(args.target, dest))


def cmd_create(ctx: Context, args: argparse.Namespace) -> int:
    _check_kind(args.type)
    dest = compose(ctx.repo_dir(), args.type, args.hostname, "", args.target)
    ctx.say("info-creating", path=dest)
    return _check_status(ctx, git.init(dest))


def _ensure_dir(ctx: Context, path: Path, key: str) -> None:
    if path.exists() and not path.is_dir():
        raise ConfigError(ctx.messages.format(key, dir=path))
    path.mkdir(parents=True, exist_ok=True)


def cmd_setup(ctx: Context, args: argparse.Namespace) -> int:
    path = ctx.config_file()
    _ensure_dir(ctx, path.parent, "error-invalid-config-dir")
    _ensure_dir(ctx, ctx.repo_dir(), "error-invalid-repo-dir")
    write_default_config(path)
    ctx.console.print(render_banner())
    ctx.say("info-setup-completed", file=path)
    return 0


def cmd_open(ctx: Context, args: argparse.Namespace) -> int:
    program = args.with_ or ctx.config.open_with
    if not program:
        raise ConfigError(ctx.messages.format("error-no-default-open-with"))
    path = find_target(ctx.repo_dir(), args.target)
    ctx.say("info-opening", path=path, program=program)
    return git.launch(program, path)


def _editor(ctx: Context, override: Optional[str]) -> str:
    editor = override or ctx.config.config_editor
    if not editor and os.name == "posix":
        editor = os.environ.get("EDITOR")
    if not editor:
        raise ConfigError(ctx.messages.format("error-no-editor-specified"))
    return editor


def cmd_config(ctx: Context, args: argparse.Namespace) -> int:
    if args.edit:
        return git.launch(_editor(ctx, args.with_), ctx.config_file())
    ctx.say("info-config-file", file=ctx.config_file())
    ctx.say("info-repo-dir", dir=ctx.repo_dir())
    return 0


def cmd_list(ctx: Context, args: argparse.Namespace) -> int:
    root = ctx.repo_dir()
    rows = collect(
        root,
        filter_type=args.filter_type,
        filter_hostname=args.filter_hostname,
        filter_path=args.filter_path,
    )
    if args.json_output:
        print(rows_to_json(rows))
    elif not rows:
        ctx.say("info-no-repos", dir=root)
    else:
        ctx.console.print(render_table(rows))
    return 0


def cmd_browse(ctx: Context, args: argparse.Namespace) -> int:
    from repohome.tui import run_tui

    chosen = run_tui(ctx.repo_dir())
    if chosen is None:
        return 0
    program = args.with_ or ctx.config.open_with
    if not program:
        # Nothing to open with: print the path so it can be piped to cd
        print(chosen)
        return 0
    return git.launch(program, chosen)


def cmd_debug(ctx: Context, args: argparse.Namespace) -> int:
    if args.debug_command == "locale":
        print(detect_locale() or "MISSING")
    else:
        print(ctx.messages.format(args.key))
    return 0


# ── Argument parsing ────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repohome",
        description="A repository manager that keeps every clone at <root>/<type>/<host>/<path>.",
    )
    level = parser.add_mutually_exclusive_group()
    level.add_argument("--system", action="store_true", help="Use the system-wide setup")
    level.add_argument("--user", action="store_true", help="Use the per-user setup (default)")
    level.add_argument("--local", action="store_true", help="Use ./.repohome in the current directory")
    level.add_argument("-c", "--config", metavar="FILE", help="Use a custom configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"repohome {__version__}")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = sub.add_parser("clone", help="Clone a remote repository into the layout")
    p.add_argument("--type", default="git", help="Repository type (default: git)")
    p.add_argument("target", help="Remote address: URL, user@host:path or local path")
    p.set_defaults(func=cmd_clone)

    p = sub.add_parser("create", help="Create a new empty repository in the layout")
    p.add_argument("--type", default="git", help="Repository type (default: git)")
    p.add_argument("--hostname", default="localhost", help="Host directory (default: localhost)")
    p.add_argument("target", help="Repository path below the host directory")
    p.set_defaults(func=cmd_create)

    p = sub.add_parser("setup", help="Write a default configuration and create directories")
    p.set_defaults(func=cmd_setup)

    p = sub.add_parser("open", help="Open a managed repository with a program")
    p.add_argument("--with", dest="with_", metavar="PROGRAM", help="Program to open with")
    p.add_argument("target", help="Repository path below its host directory")
    p.set_defaults(func=cmd_open)

    p = sub.add_parser("config", help="Show or edit the configuration")
    p.add_argument("--edit", action="store_true", help="Open the configuration file in an editor")
    p.add_argument("--with", dest="with_", metavar="EDITOR", help="Editor to use")
    p.set_defaults(func=cmd_config)

    p = sub.add_parser("list", help="List managed repositories")
    p.add_argument("--filter-type", metavar="TEXT", help="Only types containing TEXT")
    p.add_argument("--filter-hostname", metavar="TEXT", help="Only hosts containing TEXT")
    p.add_argument("--filter-path", metavar="TEXT", help="Only paths containing TEXT")
    p.add_argument("--json", action="store_true", dest="json_output", help="Output as JSON")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("browse", help="Browse managed repositories interactively")
    p.add_argument("--with", dest="with_", metavar="PROGRAM", help="Program to open the pick with")
    p.set_defaults(func=cmd_browse)

    p = sub.add_parser("debug", help="Diagnostics")
    debug_sub = p.add_subparsers(dest="debug_command", metavar="WHAT", required=True)
    debug_sub.add_parser("locale", help="Print the detected locale")
    q = debug_sub.add_parser("locale-text", help="Print a localized message")
    q.add_argument("key", help="Message key")
    p.set_defaults(func=cmd_debug)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=verbose)],
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the repohome CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    console = Console()
    err_console = Console(stderr=True)
    if args.command is None:
        console.print(render_banner())
        parser.print_help()
        return 0

    messages = Messages(detect_locale())
    try:
        setup = select_setup(system=args.system, user=args.user, local=args.local, config=args.config)
        path = config_file(setup)
        config = load_config(path)
        logger.debug("level %s, config file %s", setup.level.value, path)
        ctx = Context(setup, config, messages, console, err_console)
        return args.func(ctx, args)
    except RepohomeError as exc:
        message = messages.format(exc.key, **exc.params())
        err_console.print(error_text(message), soft_wrap=True)
        err_console.print(f"[{CYAN}]repohome --help[/{CYAN}] for usage", highlight=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())
