"""
Tron project command-line interface.

Scaffolds new projects and delegates build/run to the external Tron
toolchain (installed from npm as ``tron-lang``, built with cargo).

Usage:
    tron create            # tron.toml + main.tron, installs the toolchain
    tron build             # cargo build inside node_modules/tron-lang
    tron start             # cargo run inside node_modules/tron-lang
    tron help
"""

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence

TOOLCHAIN_PACKAGE = "tron-lang"
TOOLCHAIN_DIR = Path("node_modules") / TOOLCHAIN_PACKAGE

PROJECT_DESCRIPTOR = "tron.toml"
ENTRY_SOURCE = "main.tron"

DEFAULT_DESCRIPTOR = """\
name = "TronProject"
entry = "main"
version = "0.0.1"
authors = "YOU"
license = "MIT"
decor = "default"
pointer = "default"
env = "prod"
experimental = "false"
credits = "false"
warnings = "true"
"""

DEFAULT_ENTRY = 'print "Hello, World!";\n'


def run_command(cmd: Sequence[str], cwd: Path) -> int:
    """
    Run an external command and echo its captured output.

    Failures are reported but never raised: the caller keeps going.
    """
    try:
        result = subprocess.run(
            list(cmd),
            cwd=str(cwd),
            capture_output=True,
            text=True,
        )
    except (FileNotFoundError, NotADirectoryError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 127

    if result.returncode != 0:
        print(f"error: command {' '.join(cmd)} exited with {result.returncode}", file=sys.stderr)
        if result.stderr:
            print(f"stderr: {result.stderr}", file=sys.stderr)
    elif result.stderr:
        print(f"stderr: {result.stderr}", file=sys.stderr)
    else:
        print(f"stdout: {result.stdout}")
    return result.returncode


def cmd_create(args: argparse.Namespace) -> int:
    """Handle the create command - write starter files and fetch the toolchain."""
    project_dir: Path = args.path
    project_dir.mkdir(parents=True, exist_ok=True)

    (project_dir / PROJECT_DESCRIPTOR).write_text(DEFAULT_DESCRIPTOR, encoding="utf-8")
    (project_dir / ENTRY_SOURCE).write_text(DEFAULT_ENTRY, encoding="utf-8")
    print(f"Created {PROJECT_DESCRIPTOR} and {ENTRY_SOURCE} in {project_dir}")

    run_command(["npm", "install", TOOLCHAIN_PACKAGE], cwd=project_dir)
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the build command."""
    run_command(["cargo", "build"], cwd=args.path / TOOLCHAIN_DIR)
    return 0


def cmd_start(args: argparse.Namespace) -> int:
    """Handle the start command."""
    run_command(["cargo", "run"], cwd=args.path / TOOLCHAIN_DIR)
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tron",
        description="Create, build and run Tron projects",
    )
    subparsers = parser.add_subparsers(dest="command")

    commands = {
        "create": (cmd_create, "Create tron.toml and main.tron, install the toolchain"),
        "build": (cmd_build, "Build the toolchain with cargo"),
        "start": (cmd_start, "Run the project through the toolchain"),
    }
    for name, (handler, help_text) in commands.items():
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--path",
            type=Path,
            default=Path("."),
            help="Project directory (default: current directory)",
        )
        sub.set_defaults(func=handler)

    subparsers.add_parser("help", help="Show this help")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    argv = sys.argv[1:] if argv is None else argv

    # Unknown commands fall back to help instead of an argparse error
    if not argv or argv[0] not in ("create", "build", "start"):
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
