"""CLI entrypoints for authortag commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .stores import RecordError


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


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="authortag",
        description="Override line authorship using @@author annotations in source files.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    annotate_parser = subparsers.add_parser(
        "annotate",
        help="Apply @@author annotations to a JSON authorship record.",
    )
    _add_verbose_option(annotate_parser, suppress_default=True)
    annotate_parser.add_argument(
        "record",
        help="Path to the authorship record produced by the blame stage.",
    )
    annotate_parser.add_argument(
        "--config",
        default=None,
        help="Author configuration file or directory (defaults to the record's directory).",
    )
    annotate_parser.add_argument(
        "--output",
        default=None,
        help="Where to write the annotated record (defaults to overwriting the input).",
    )
    annotate_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=1,
        help="Number of files to annotate concurrently.",
    )
    annotate_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write detailed log records to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for authortag commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(log_file) if log_file else None,
    )

    if args.command == "annotate":
        orchestrator = Orchestrator(max_workers=args.workers)
        try:
            outcome = orchestrator.run(
                Path(args.record),
                config_path=Path(args.config) if args.config else None,
                output_path=Path(args.output) if args.output else None,
            )
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, RecordError) as exc:
            parser.exit(1, f"authortag annotate failed: {exc}\n")
        print(f"Annotated {len(outcome.files)} files -> {_relativize(outcome.path)}")
        for author, count in sorted(
            outcome.contributions.items(), key=lambda item: (-item[1], item[0].git_id)
        ):
            print(f"  {author.name}: {count} lines")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
