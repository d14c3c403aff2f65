import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from cargo_next import __version__
from cargo_next.errors import CargoNextError, ValueEncodingError
from cargo_next.logging import get_logger, init_logging
from cargo_next.manifest import (
    MANIFEST_FILE_NAME,
    read_version_string,
    write_version_string,
)
from cargo_next.version import Increment, bump_version, render

EMPTY_STDIN_VERSION = "0.0.0"


def _read_stdin() -> Optional[str]:
    """Return the first non-empty line piped on stdin, stripped.

    Bytes that are not UTF-8 are rejected here, whether the stream raises on
    them or hands them over surrogate-escaped.
    """
    if sys.stdin is None:
        return None
    try:
        for line in sys.stdin:
            line = line.strip()
            if line:
                line.encode("utf-8")
                return line
    except UnicodeDecodeError as e:
        raise ValueEncodingError(e.object[e.start : e.end], e.reason) from e
    except UnicodeEncodeError as e:
        raise ValueEncodingError(e.object, e.reason) from e
    return None


def _strip_cargo_subcommand(argv: List[str]) -> List[str]:
    # `cargo next get` runs `cargo-next next get`
    if argv and argv[0] == "next":
        return argv[1:]
    return argv


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-next",
        description="Get, set or bump the package version in Cargo.toml.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--manifest-path",
        default=None,
        help=f"Path to the manifest (default: ./{MANIFEST_FILE_NAME}).",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("CARGO_NEXT_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("get", help="Print the current version")
    for kind in Increment:
        sub.add_parser(kind.value, help=f"Bump the {kind.value} version")
    set_cmd = sub.add_parser(
        "set", help="Set the version (first line of UTF-8 stdin when omitted)"
    )
    set_cmd.add_argument("version", nargs="?", default=None)
    return parser


def run_command(
    command: str, manifest_path: Path, version: Optional[str] = None
) -> str:
    """Execute one command against the manifest and return the version to print."""
    if command == "get":
        return read_version_string(manifest_path)
    if command == "set":
        if version is None:
            version = _read_stdin()
        if version is None:
            return EMPTY_STDIN_VERSION
        write_version_string(manifest_path, version)
        return version
    current = read_version_string(manifest_path)
    new_version = render(bump_version(current, Increment(command)))
    write_version_string(manifest_path, new_version)
    return new_version


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args(_strip_cargo_subcommand(sys.argv[1:]))

    init_logging(args.log_level)
    log = get_logger("cargo_next.cli")

    if args.manifest_path:
        manifest_path = Path(args.manifest_path)
    else:
        manifest_path = Path.cwd() / MANIFEST_FILE_NAME
    if not manifest_path.is_file():
        raise SystemExit(f"Not inside a project folder: {manifest_path} not found")

    log.debug("Running %s on %s", args.command, manifest_path)
    try:
        result = run_command(
            args.command, manifest_path, getattr(args, "version", None)
        )
    except CargoNextError as e:
        log.debug("Command %s failed", args.command, exc_info=True)
        raise SystemExit(str(e)) from e

    print(result)


if __name__ == "__main__":
    main()
