"""CLI entrypoints for compdoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compdoc",
        description="Generate JSON documentation for React components from their TypeScript sources.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    document_parser = subparsers.add_parser(
        "document",
        help="Extract component props and write the documentation file.",
    )
    _add_verbose_option(document_parser, suppress_default=True)
    _add_path_argument(document_parser)
    document_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file path (defaults to the configured output, docs/components.json).",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List the component files that would be documented.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_path_argument(list_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing documentation operations.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for compdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = None
    if args.command in {"document", "list"}:
        try:
            log_file = load_config(Path(args.path)).log_file
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=log_file)

    orchestrator = Orchestrator()

    if args.command == "document":
        try:
            outcome = orchestrator.run_document(args.path, args.output)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except Exception as exc:  # pragma: no cover - defensive guard
            parser.exit(1, f"compdoc document failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Documented {len(outcome.components)} components in {_relativize(outcome.path)}")
    elif args.command == "list":
        try:
            config = load_config(Path(args.path))
            files = orchestrator.list_components(config)
        except (FileNotFoundError, NotADirectoryError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        for file_path in files:
            print(file_path.name)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
