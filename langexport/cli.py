"""CLI entrypoints for langexport commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import LocalizationError
from .exporter import LocalizationExporter
from .logging import configure_logging
from .render import render_json, write_export


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


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root containing .langexport.yml (defaults to current directory).",
    )


def _add_flat_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--flat",
        action="store_true",
        default=None,
        help='Emit "<lang>.<namespace>" keys instead of the nested document.',
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="langexport",
        description="Merge per-language translation files into a single document.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser(
        "export",
        help="Write the merged translations to a JavaScript or JSON file.",
    )
    _add_verbose_option(export_parser, suppress_default=True)
    _add_log_file_option(export_parser, suppress_default=True)
    _add_path_argument(export_parser)
    _add_flat_option(export_parser)
    export_parser.add_argument(
        "-o",
        "--output",
        help="Target file; overrides export.filepath from the config.",
    )
    export_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Rebuild from the definition files even when a cached copy exists.",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print the merged translations as JSON.",
    )
    _add_verbose_option(show_parser, suppress_default=True)
    _add_log_file_option(show_parser, suppress_default=True)
    _add_path_argument(show_parser)
    _add_flat_option(show_parser)
    show_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Rebuild from the definition files even when a cached copy exists.",
    )

    clear_parser = subparsers.add_parser(
        "clear-cache",
        help="Remove the cached document.",
    )
    _add_verbose_option(clear_parser, suppress_default=True)
    _add_log_file_option(clear_parser, suppress_default=True)
    _add_path_argument(clear_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the merged translations over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_log_file_option(serve_parser, suppress_default=True)
    _add_path_argument(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for langexport commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(args.path, host=args.host, port=args.port)
        return

    try:
        exporter = LocalizationExporter.from_path(args.path)
        if args.command == "export":
            _run_export(exporter, args)
        elif args.command == "show":
            result = exporter.export(use_cache=not args.no_cache)
            flat = args.flat if args.flat is not None else exporter.config.export.flat
            print(render_json(result.as_flat() if flat else result.as_nested()))
        elif args.command == "clear-cache":
            removed = exporter.clear_cache()
            print("Cache cleared" if removed else "Cache was already empty")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except (LocalizationError, ValueError) as exc:
        parser.exit(
            1, f"langexport {args.command} failed: {exc}\nRun with --verbose for more details.\n"
        )


def _run_export(exporter: LocalizationExporter, args: argparse.Namespace) -> None:
    settings = exporter.config.export
    target = Path(args.output) if args.output else settings.filepath
    flat = args.flat if args.flat is not None else settings.flat

    result = exporter.export(use_cache=not args.no_cache)
    written = write_export(result, target, variable=settings.variable, flat=flat)
    print(f"Translations written to {_relativize(written)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
