"""Command line interface for crud_uploader package."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.logging import RichHandler

from . import __version__
from .cli_progress import ConsoleStatusSink, render_configuration_summary
from .models import GeneratorConfig, SubmissionInput
from .orchestrator import GenerationOrchestrator
from .services.download import DirectoryDownloadTarget


class CLIError(RuntimeError):
    """Raised when CLI validation/execution fails."""


def _setup_logging(debug: bool, silent: bool, log_level: Optional[str]) -> str:
    """
    Configure logging.

    Default behavior is silent unless --debug or --log-level is provided.
    Returns a string describing effective mode.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    logging.disable(logging.NOTSET)

    if silent or (not debug and not log_level):
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    if debug:
        level = logging.DEBUG
    elif log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        env_level = os.getenv("LOG_LEVEL")
        level = getattr(logging, (env_level or "INFO").upper(), logging.INFO)

    handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return logging.getLevelName(level)


def _strip_optional_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_env_file(path: Path, override: bool = False) -> None:
    if not path.exists():
        raise CLIError(f"env file not found: {path}")
    if not path.is_file():
        raise CLIError(f"env path is not a file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        value = _strip_optional_quotes(value.strip())
        if override or key not in os.environ:
            os.environ[key] = value


def _resolve_default_env_file() -> Optional[Path]:
    default_env = Path(".env")
    return default_env if default_env.exists() and default_env.is_file() else None


def _check_input_file(path: Optional[Path], label: str) -> Optional[Path]:
    if path is None:
        return None
    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise CLIError(f"{label} file does not exist: {resolved}")
    if not resolved.is_file():
        raise CLIError(f"{label} path is not a file: {resolved}")
    return resolved


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    try:
        return GeneratorConfig.from_env(
            base_url=args.api_url,
            output_dir=args.output_dir,
            timeout=args.timeout,
        )
    except ValueError as exc:
        raise CLIError(str(exc)) from exc


async def _run_submit(config: GeneratorConfig, form: SubmissionInput) -> int:
    status = ConsoleStatusSink()
    downloads = DirectoryDownloadTarget(config.output_dir, config.default_filename)

    async with GenerationOrchestrator(config, status=status, downloads=downloads) as generator:
        await generator.submit(form)

    if downloads.last_saved is None:
        return 1
    print(f"Saved: {downloads.last_saved}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crud-up",
        description="Upload a SQL schema to the CRUD generator and download the generated project ZIP.",
    )
    parser.add_argument("sql", nargs="?", type=Path, help="SQL schema file")
    parser.add_argument(
        "-p",
        "--project-name",
        default="",
        help="Project name sent as 'project-name'",
    )
    parser.add_argument(
        "-o",
        "--overrides",
        type=Path,
        default=None,
        help="Optional overrides file",
    )
    parser.add_argument(
        "-d",
        "--output-dir",
        type=Path,
        default=None,
        help="Where to save the ZIP (default from CRUD_UPLOADER_OUTPUT_DIR or current directory)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Generator base URL (default from CRUD_UPLOADER_API_URL or http://localhost:8080)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: wait indefinitely)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument("--silent", action="store_true", help="Only print errors")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"crud-up {__version__}",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    used_env_file = args.env_file or _resolve_default_env_file()
    if used_env_file is not None:
        try:
            _load_env_file(Path(used_env_file))
        except CLIError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    effective_log_mode = _setup_logging(
        debug=args.debug,
        silent=args.silent,
        log_level=args.log_level,
    )

    if args.sql is None:
        parser.print_help()
        return 0

    try:
        sql_path = _check_input_file(args.sql, "SQL")
        overrides_path = _check_input_file(args.overrides, "overrides")
        config = _build_config(args)
        form = SubmissionInput.from_paths(sql_path, args.project_name, overrides_path)
    except CLIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: could not read input: {exc}", file=sys.stderr)
        return 1

    render_configuration_summary(
        {
            "SQL": str(sql_path),
            "Overrides": str(overrides_path) if overrides_path else "-",
            "Project": form.trimmed_project_name or "(missing)",
            "API": f"{config.base_url}{config.endpoint}",
            "Output Dir": str(config.output_dir),
            "Timeout": f"{config.timeout:g}s" if config.timeout else "none",
            "Env File": str(used_env_file) if used_env_file else "-",
            "Logging": effective_log_mode,
        }
    )

    try:
        return asyncio.run(_run_submit(config, form))
    except KeyboardInterrupt:
        print("Cancelled.", file=sys.stderr)
        return 130


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
