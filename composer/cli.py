"""Main entry point for the Composer CLI."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from composer import __version__
from composer.config import settings
from composer.kernel.errors import ComposerError
from composer.kernel.generator import generate, generate_markup
from composer.kernel.persistence import fingerprint, loads
from composer.kernel.registry import default_registry
from composer.kernel.tree import ElementTree

logger = logging.getLogger(__name__)


def print_help():
    """Print help message."""
    print(f"""
Composer CLI v{__version__}

Usage:
  composer [options] <command> FILE

Commands:
  generate FILE     Compile a saved composition (JSON) to component source
  check FILE        Validate a saved composition and print its fingerprint

Options:
  --dialect D       tsx (typed, default) or jsx (untyped)
  --name NAME       Exported component name (default: GeneratedComponent)
  --indent N        Spaces per indentation level (default: 2)
  --out PATH        Write source to PATH instead of stdout
  --markup          Emit only the element markup, no component wrapper
  --no-imports      Omit import lines
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  COMPOSER_DIALECT, COMPOSER_COMPONENT_NAME, COMPOSER_INDENT_WIDTH,
  COMPOSER_IMPORT_MODULE, COMPOSER_LOG_LEVEL

Examples:
  composer generate page.json                       # TSX to stdout
  composer generate page.json --dialect jsx --name Landing --out Landing.jsx
  composer check page.json
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (generate, check)
        file: str | None
        dialect: str | None
        name: str | None
        indent: int | None
        out: str | None
        markup: bool
        include_imports: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "file": None,
        "dialect": None,
        "name": None,
        "indent": None,
        "out": None,
        "markup": False,
        "include_imports": True,
        "show_help": False,
        "show_version": False,
    }

    def value_for(flag: str, i: int) -> str:
        if i + 1 < len(args):
            return args[i + 1]
        print(f"Error: {flag} requires a value")
        sys.exit(1)

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("generate", "check") and result["command"] is None:
            result["command"] = arg
        elif arg == "--dialect":
            result["dialect"] = value_for(arg, i)
            i += 1
        elif arg == "--name":
            result["name"] = value_for(arg, i)
            i += 1
        elif arg == "--indent":
            raw = value_for(arg, i)
            if not raw.isdigit() or int(raw) < 1:
                print("Error: --indent requires a positive integer")
                sys.exit(1)
            result["indent"] = int(raw)
            i += 1
        elif arg == "--out":
            result["out"] = value_for(arg, i)
            i += 1
        elif arg == "--markup":
            result["markup"] = True
        elif arg == "--no-imports":
            result["include_imports"] = False
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'composer --help' for usage.")
            sys.exit(1)
        elif result["command"] is not None and result["file"] is None:
            result["file"] = arg
        else:
            print(f"Unknown command: {arg}")
            print("Run 'composer --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def run_generate(args: dict) -> int:
    registry = default_registry()
    snapshot = loads(Path(args["file"]).read_text(encoding="utf-8"), registry)
    options = settings.generate_options(
        dialect=args["dialect"],
        component_name=args["name"],
        indent_width=args["indent"],
        include_imports=args["include_imports"],
    )
    if args["markup"]:
        source = generate_markup(snapshot, options, registry)
    else:
        source = generate(snapshot, options, registry).source

    if args["out"]:
        Path(args["out"]).write_text(source, encoding="utf-8")
        logger.info("wrote %s (%d bytes)", args["out"], len(source.encode("utf-8")))
    else:
        sys.stdout.write(source)
    return 0


def run_check(args: dict) -> int:
    registry = default_registry()
    snapshot = loads(Path(args["file"]).read_text(encoding="utf-8"), registry)
    problems = ElementTree.from_snapshot(snapshot, registry).check_integrity()
    for problem in problems:
        print(f"  {problem}")
    print(f"{len(snapshot.elements)} elements, fingerprint {fingerprint(snapshot)}")
    return 1 if problems else 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=getattr(logging, settings.COMPOSER_LOG_LEVEL, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle help and version first
    if args["show_help"]:
        print_help()
        return 0

    if args["show_version"]:
        print(f"composer {__version__}")
        return 0

    if args["command"] is None or args["file"] is None:
        print_help()
        return 1

    try:
        if args["command"] == "generate":
            return run_generate(args)
        return run_check(args)
    except (OSError, ComposerError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
