"""CLI entrypoints for assetgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import CONFIG_FILENAME, load_config
from .errors import AssetGenError
from .logging import configure_logging
from .models import GenerationSummary
from .orchestrator import AssetGenerator


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


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write a DEBUG-level log of the run to this file.",
    )


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Configuration file to use instead of <path>/{CONFIG_FILENAME}.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetgen",
        description="Normalize asset file names and generate a typed asset index module.",
    )
    _add_verbose_option(parser)
    _add_output_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen_parser = subparsers.add_parser(
        "gen",
        help="Run every configured asset generator.",
    )
    _add_verbose_option(gen_parser, suppress_default=True)
    _add_project_arguments(gen_parser)

    images_parser = subparsers.add_parser(
        "images",
        help="Generate the image asset index only.",
    )
    _add_verbose_option(images_parser, suppress_default=True)
    _add_project_arguments(images_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for assetgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    config_path = Path(args.config) if args.config else Path(args.path)
    generator = AssetGenerator()

    try:
        config = load_config(config_path)
        if args.command == "gen":
            summaries = generator.run_all(config)
        elif args.command == "images":
            summaries = [generator.generate_images(config)]
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except AssetGenError as exc:
        parser.exit(1, f"assetgen {args.command} failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"assetgen {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    _print_summaries(summaries)


def _print_summaries(summaries: List[GenerationSummary]) -> None:
    if not summaries:
        print("No generators ran")
        return
    for summary in summaries:
        print(f"Image index written to {_relativize(summary.output_path)}")
        print(f"  Images processed: {summary.total}")
        print(f"  Base directory images: {summary.primary_count}")
        if summary.secondary_root is not None and summary.secondary_count:
            print(f"  Public directory images: {summary.secondary_count}")
        if summary.renamed:
            print(f"  Renamed files: {len(summary.renamed)}")
        print(f"  Naming convention: {summary.naming_convention.value}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
