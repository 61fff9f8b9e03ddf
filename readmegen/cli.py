"""CLI entrypoints for readmegen commands."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .config import (
    DEFAULT_LANGUAGE,
    DEFAULT_MODEL,
    DEFAULT_REQUEST_TIMEOUT,
    ConfigError,
    ReadmeGenConfig,
    credentials_from_env,
    load_config,
)
from .errors import ReadmeGenError
from .generators import CopilotInstructionsGenerator, ReadmeGenerator
from .generators.base import default_provider_factory
from .logging import configure_logging
from .models import Credentials, FolderResult, GenerationReport, GenerationRequest, GenerationStatus
from .scanner import FolderScanner

_STATUS_LABELS = {
    GenerationStatus.WRITTEN: "generated",
    GenerationStatus.DRY_RUN: "would write (dry-run)",
    GenerationStatus.DIRECTORY_NOT_FOUND: "skipped, directory not found",
    GenerationStatus.GENERATION_FAILED: "failed, empty response",
    GenerationStatus.PROVIDER_ERROR: "failed, provider error",
    GenerationStatus.IO_ERROR: "failed, I/O error",
}


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


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "-d",
        "--directory",
        default=".",
        help="Target directory (defaults to current directory).",
    )
    parser.add_argument(
        "-m",
        "--model",
        default=None,
        help=f"LLM model name, e.g. gpt-4o or gemini-2.0-flash (default: {DEFAULT_MODEL}).",
    )
    parser.add_argument("--api-key", default=None, help="API key for the model provider.")
    parser.add_argument("--api-url", default=None, help="Override the provider API base URL.")
    parser.add_argument(
        "-l",
        "--language",
        default=None,
        help=f"Language of the generated document (default: {DEFAULT_LANGUAGE}).",
    )
    parser.add_argument(
        "--env",
        action="store_true",
        help="Read the API key and URL from environment variables.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .readmegen.yml file (defaults to the current directory).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build prompts without calling the model or writing files.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readmegen",
        description="Generate folder READMEs and Copilot instructions with an LLM.",
    )
    _add_verbose_option(parser)
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    readme_parser = subparsers.add_parser(
        "readme",
        help="Generate a README.md based on folder contents.",
    )
    _add_common_options(readme_parser)
    readme_parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Also generate a README.md for every subdirectory.",
    )

    copilot_parser = subparsers.add_parser(
        "copilot",
        help="Generate .github/copilot-instructions.md from all README.md files.",
    )
    _add_common_options(copilot_parser)
    copilot_parser.add_argument(
        "--no-append-readmes",
        dest="append_readmes",
        action="store_false",
        help="Do not append the collected README files to the instructions.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for readmegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        config = load_config(Path(args.config) if args.config else None)
        request = _build_request(args, config)
    except ConfigError as exc:
        parser.exit(2, f"readmegen: {exc}\n")

    scanner = FolderScanner.from_config(config.scan)
    factory = default_provider_factory(config.llm.request_timeout or DEFAULT_REQUEST_TIMEOUT)
    dry_run = bool(args.dry_run)

    try:
        if args.command == "readme":
            report = ReadmeGenerator(scanner, provider_factory=factory, dry_run=dry_run).generate(request)
        elif args.command == "copilot":
            report = CopilotInstructionsGenerator(
                scanner,
                provider_factory=factory,
                append_readmes=bool(args.append_readmes),
                dry_run=dry_run,
            ).generate(request)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ReadmeGenError, OSError) as exc:
        parser.exit(1, f"readmegen {args.command} failed: {exc}\n")

    _print_report(report)
    if not report.ok:
        parser.exit(1, f"readmegen {args.command} finished with {len(report.failed)} failure(s).\n")


def _build_request(args: argparse.Namespace, config: ReadmeGenConfig) -> GenerationRequest:
    if args.env:
        credentials = credentials_from_env(os.environ)
        api_key = args.api_key or credentials.api_key
        api_url = args.api_url or credentials.api_url or config.llm.api_url
    else:
        api_key = args.api_key or config.llm.api_key
        api_url = args.api_url or config.llm.api_url
        if not api_key and not args.dry_run:
            raise ConfigError("An API key is required. Pass --api-key or use --env.")

    return GenerationRequest(
        target_path=Path(args.directory).expanduser(),
        model=args.model or config.llm.model or DEFAULT_MODEL,
        credentials=Credentials(api_key=api_key or "", api_url=api_url),
        recursive=bool(getattr(args, "recursive", False)),
        language=args.language or config.language or DEFAULT_LANGUAGE,
    )


def _print_report(report: GenerationReport) -> None:
    for result in report.results:
        print(_format_result(result))


def _format_result(result: FolderResult) -> str:
    label = _STATUS_LABELS[result.status]
    target = result.output_path if result.output_path is not None else result.path
    return f"{_relativize(target)}: {label}"


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
