"""CLI entrypoints for readmegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_settings
from .errors import ReadmeGenError
from .logging import configure_logging, mask_secrets
from .orchestrator import Orchestrator
from .stores import JsonIdentityStore


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
        prog="readmegen",
        description="Generate README documentation for a GitHub repository with an LLM.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .readmegen.yml or the directory containing it (defaults to cwd).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    connect_parser = subparsers.add_parser(
        "connect",
        help="Verify a repository exists and remember it for generation.",
    )
    _add_verbose_option(connect_parser, suppress_default=True)
    connect_parser.add_argument("url", help="Repository URL, e.g. https://github.com/owner/repo")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a README for the connected repository.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the generated markdown here instead of stdout.",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print the currently connected repository.",
    )
    _add_verbose_option(show_parser, suppress_default=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for readmegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(args.host, args.port, config_path=args.config)
        return

    try:
        settings = load_settings(args.config or Path.cwd())
    except ReadmeGenError as exc:
        parser.exit(1, f"{exc}\n")
    mask_secrets(settings.github.token, settings.llm.api_key)
    settings.report_missing_credentials()
    orchestrator = Orchestrator(settings, JsonIdentityStore(settings.store_path))

    if args.command == "connect":
        try:
            result = orchestrator.connect(args.url)
        except Exception as exc:  # pragma: no cover - defensive guard
            parser.exit(1, f"readmegen connect failed: {exc}\nRun with --verbose for more details.\n")
        if not result.success:
            parser.exit(1, f"{result.notification.message}\n")
        print(result.notification.message, file=sys.stderr)
        if result.identity is not None:
            print(result.identity.html_url)
    elif args.command == "generate":
        try:
            result = orchestrator.generate()
        except Exception as exc:  # pragma: no cover - defensive guard
            parser.exit(1, f"readmegen generate failed: {exc}\nRun with --verbose for more details.\n")
        if not result.success or result.document is None:
            parser.exit(1, f"{result.notification.message}\n")
        if args.output is not None:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(result.document.markdown, encoding="utf-8")
            print(f"README written to {_relativize(args.output)}", file=sys.stderr)
        else:
            print(result.document.markdown)
        print(result.notification.message, file=sys.stderr)
    elif args.command == "show":
        identity = orchestrator.current()
        if identity is None:
            parser.exit(1, "No repository connected. Run `readmegen connect <url>` first.\n")
        print(identity.html_url)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
