"""CLI entrypoints for hubgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import ContractLoadError, GenerationError
from .generator import Generator
from .logging import configure_logging
from .source_scanner import scan_declared_types_file


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hubgen",
        description="Generate a typed C# client proxy from a hub contract.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate (or regenerate) the client proxy source file.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "config",
        nargs="?",
        default=".",
        help="Configuration file or directory holding .hubgen.yml (defaults to current directory).",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the source diff without writing the output file.",
    )

    scan_parser = subparsers.add_parser(
        "scan",
        help="List type names already declared in a C# source file.",
    )
    _add_verbose_option(scan_parser, suppress_default=True)
    scan_parser.add_argument("path", help="C# source file to scan.")
    scan_parser.add_argument(
        "--namespace",
        required=True,
        help="Namespace whose declarations should be listed.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for hubgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=args.command == "scan",
        log_file=args.log_file,
    )

    if args.command == "generate":
        dry_run = bool(getattr(args, "dry_run", False))
        try:
            config = load_config(Path(args.config))
            outcome = Generator().run(config, dry_run=dry_run)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        except (ContractLoadError, GenerationError) as exc:
            parser.exit(1, f"hubgen generate failed: {exc}\n")
        except OSError as exc:
            parser.exit(1, f"hubgen generate failed: {exc}\nRun with --verbose for more details.\n")
        if not outcome.diff:
            print(f"{_relativize(outcome.path)} already up to date")
        elif dry_run:
            print("Source changes (dry-run):")
            print(outcome.diff)
        else:
            print(f"Client proxy written to {_relativize(outcome.path)}")
    elif args.command == "scan":
        names = scan_declared_types_file(Path(args.path), args.namespace)
        for name in sorted(names):
            print(name)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
