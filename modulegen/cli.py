"""CLI entrypoints for modulegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import OUTPUT_STYLES
from .errors import ModuleGenError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .validators import ValidationError


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


def _add_output_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Name of the output file, without extension (defaults to `module`).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modulegen",
        description="Build, render and validate modules split across directory trees.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build a module document from a directory.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument("source", help="Path to the module directory.")
    _add_output_option(build_parser)
    build_parser.add_argument(
        "-t",
        "--type",
        dest="style",
        choices=OUTPUT_STYLES,
        default=None,
        help="Write pretty (indented) or minimized JSON.",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Render the contents of a built module in a given format.",
    )
    _add_verbose_option(render_parser, suppress_default=True)
    render_parser.add_argument("source", help="Path to the built module document.")
    render_parser.add_argument("format", help="Rendering format, e.g. `md` or `txt`.")
    _add_output_option(render_parser)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a built module against the module schema and its type schemas.",
    )
    _add_verbose_option(validate_parser, suppress_default=True)
    validate_parser.add_argument("source", help="Path to the built module document.")
    validate_parser.add_argument(
        "--schema",
        default=None,
        help="URL or path of the module schema (overrides .modulegen.yml).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing build/render/validate.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for modulegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()

    if args.command == "build":
        try:
            outcome = orchestrator.run_build(args.source, output=args.output, style=args.style)
        except ModuleGenError as exc:
            parser.exit(1, f"modulegen build failed: {_format_chain(exc)}\n")
        except OSError as exc:
            parser.exit(1, f"modulegen build failed: {exc}\n")
        print(f"Module written to {_relativize(outcome.path)}")
    elif args.command == "render":
        try:
            target = orchestrator.run_render(args.source, args.format, output=args.output)
        except ModuleGenError as exc:
            parser.exit(1, f"modulegen render failed: {_format_chain(exc)}\n")
        except OSError as exc:
            parser.exit(1, f"modulegen render failed: {exc}\n")
        print(f"Rendered module written to {_relativize(target)}")
    elif args.command == "validate":
        try:
            orchestrator.run_validate(args.source, schema=args.schema)
        except ValidationError as exc:
            lines = [f"{exc}:"]
            lines.extend(f"  - {issue.location}: {issue.message}" for issue in exc.issues)
            parser.exit(1, "\n".join(lines) + "\n")
        except ModuleGenError as exc:
            parser.exit(1, f"modulegen validate failed: {_format_chain(exc)}\n")
        print("Module is valid")
    elif args.command == "serve":
        from .service import run_service

        run_service(
            host=args.host, port=args.port, verbose=bool(args.verbose), log_file=args.log_file
        )
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _format_chain(exc: BaseException) -> str:
    messages = [str(exc)]
    cause = exc.__cause__
    while cause is not None:
        text = str(cause)
        if text and text not in messages[-1]:
            messages.append(text)
        cause = cause.__cause__
    return "\n  caused by: ".join(messages)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
