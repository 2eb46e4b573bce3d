from __future__ import annotations

import argparse
import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import NoReturn, TextIO

from gmc import NAME, URL, config
from gmc.config import Settings
from gmc.create import CreateOptions, create_module
from gmc.errors import GmcError, UsageError
from gmc.runner import CommandRunner
from gmc.templates import DEFAULT_TEMPLATE_SET, optional_template_sets, template_set_spec

logger = logging.getLogger(__name__)

USAGE = f"{NAME} [options] [module name]"


def get_version() -> str:
    try:
        return metadata.version(NAME)
    except metadata.PackageNotFoundError:
        return "(devel)"


def _description() -> str:
    lines = [
        f"`{NAME} [module name]` creates a directory containing:",
        "- Go module metadata: go.mod",
        f"- {template_set_spec(DEFAULT_TEMPLATE_SET).label}",
        "",
        "This module can be immediately run:",
        "",
        "    $ go run .",
        "    hello, world!",
        "",
        "Optionally, the directory can also include:",
        "- Git repository setup with .gitignore, README.md",
    ]
    lines += [f"- {spec.label}" for spec in optional_template_sets()]
    lines += ["", f"More information: {URL}"]
    return "\n".join(lines)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        logger.debug("argument parsing failed: %s", message)
        raise UsageError("Error: Unknown flag")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=NAME,
        usage=USAGE,
        description=f"{NAME} - (Go mod create) creates Go modules so you can start coding ASAP",
        epilog=_description(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("modules", nargs="*", metavar="module name", help=argparse.SUPPRESS)
    parser.add_argument("--git", "-g", action="store_true", help="create as Git repository")
    for spec in optional_template_sets():
        flags = [f for f in (spec.flag, spec.short_flag) if f]
        parser.add_argument(
            *flags,
            dest="template_sets",
            action="append_const",
            const=spec.name,
            help=f"include {spec.label}",
        )
    parser.add_argument("--quiet", "-q", action="store_true", help="silence output")
    parser.add_argument("--help", "-h", action="store_true", help="show help")
    parser.add_argument("--version", "-v", action="store_true", help="print the version")
    return parser


def run(
    argv: list[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    settings: Settings | None = None,
    runner: CommandRunner | None = None,
    parent_dir: Path | None = None,
) -> int:
    """Run the command line and return its exit code."""
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    parser = build_parser()

    def _usage_failure(e: UsageError) -> int:
        err.write(f"{e}\n\n")
        out.write(parser.format_help())
        return 1

    try:
        ns = parser.parse_intermixed_args(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        return _usage_failure(e)

    if ns.help:
        out.write(parser.format_help())
        return 0
    if ns.version:
        out.write(f"{NAME} version {get_version()}\n")
        return 0

    if not ns.modules:
        return _usage_failure(UsageError("Error: Module name is required"))
    if len(ns.modules) > 1:
        return _usage_failure(UsageError("Error: Only one module name is allowed"))

    cfg = settings or Settings.from_env()
    options = CreateOptions(
        optional_sets=tuple(ns.template_sets or ()),
        git=ns.git,
        initial_branch=cfg.git_initial_branch,
        quiet=ns.quiet,
    )
    try:
        create_module(
            ns.modules[0],
            options,
            output=out,
            parent_dir=parent_dir,
            settings=cfg,
            runner=runner,
        )
    except GmcError as e:
        err.write(f"Error: {e}\n")
        return 1
    return 0


def main() -> int:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    return run()
