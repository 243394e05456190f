"""Main CLI entry point for the xwiki-storage command.

This module provides the Typer application that drives a storage through
the generic verbs. The storage is described by a YAML file (--config) or,
by default, by the XWIKI_* environment settings.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import typer

from src.cli.errors import InputError
from src.cli.models import CLIState, ExitCode
from src.cli.output import OutputHandler
from src.storage.base import Storage
from src.storage.command import Command
from src.storage.config_loader import StorageConfigLoader
from src.storage.models import StorageResponse
from src.storage.registry import build_default_registry
from src.storage.xwiki_storage import XWikiStorage
from src.xwiki_client.errors import (
    APIUnreachableError,
    PageNotFoundError,
    StorageError,
)
from src.xwiki_client.settings import SettingsLoader

app = typer.Typer(
    name="xwiki-storage",
    help="""Store JSON documents and attachments as XWiki pages.

EXAMPLES:
  xwiki-storage list --space Blog --include-docs
  xwiki-storage post --space Blog --data '{"title": "Hello"}'
  xwiki-storage get Blog.Hello
  xwiki-storage put-attachment Blog.Hello cover.png ./cover.png""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _make_handler(handler: logging.Handler, level: int, log_format: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    return handler


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Route the 'src' logger namespace to stderr and optionally a log file.

    Handlers installed by an earlier call are closed and replaced, so the
    function can run once per CLI invocation in the same process. Third-party
    loggers and the root logger are left unchanged.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2 or more=DEBUG
        logdir: Directory receiving a timestamped xwiki-storage_*.log file
    """
    level = LOG_LEVELS.get(verbosity, logging.DEBUG)

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    app_logger.addHandler(
        _make_handler(logging.StreamHandler(sys.stderr), level, "%(asctime)s [%(levelname)8s] %(message)s")
    )

    if not logdir:
        return

    log_path = Path(logdir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f"xwiki-storage_{datetime.now():%Y%m%d_%H%M%S}.log"
    app_logger.addHandler(
        _make_handler(
            logging.FileHandler(log_file, encoding="utf-8"),
            level,
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    )
    logger.info(f"Logging to file: {log_file}")


def _create_storage(config_path: Optional[str]) -> Storage:
    """Build the storage from a YAML description or from the environment.

    Raises:
        FilesystemError: If the description file cannot be read
        ConfigError: If the description or the settings are invalid
    """
    if config_path:
        description = StorageConfigLoader.load(config_path)
        return build_default_registry().create(description)
    return XWikiStorage(SettingsLoader().get_settings())


def _exit_code_for(error: StorageError) -> ExitCode:
    if isinstance(error, PageNotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, APIUnreachableError):
        return ExitCode.NETWORK_ERROR
    return ExitCode.GENERAL_ERROR


def _load_metadata(data: Optional[str], file: Optional[str]) -> Dict[str, Any]:
    """Read document metadata given inline (--data) or in a file (--file).

    Raises:
        InputError: If both or neither are given, or the JSON is not an object
    """
    if (data is None) == (file is None):
        raise InputError("Provide document metadata with exactly one of --data or --file")

    if file is not None:
        try:
            data = Path(file).read_text(encoding="utf-8")
        except OSError as e:
            raise InputError(f"Cannot read {file}: {e}")

    try:
        metadata = json.loads(data)
    except ValueError as e:
        raise InputError(f"Document metadata is not valid JSON: {e}")

    if not isinstance(metadata, dict):
        raise InputError(f"Document metadata must be a JSON object, got {type(metadata).__name__}")
    return metadata


def _run(
    ctx: typer.Context,
    method: str,
    params: Optional[Mapping[str, Any]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> StorageResponse:
    """Execute one storage verb, exiting with an error code if it fails."""
    state: CLIState = ctx.obj
    output = OutputHandler(verbosity=state.verbosity, no_color=state.no_color)

    try:
        storage = _create_storage(state.config_path)
        command = Command()
        storage.execute(method, command, params, options)
        return command.result()
    except StorageError as e:
        logger.error(f"{method} failed: {e}")
        output.error(str(e))
        raise typer.Exit(_exit_code_for(e))


def _output(ctx: typer.Context) -> OutputHandler:
    state: CLIState = ctx.obj
    return OutputHandler(verbosity=state.verbosity, no_color=state.no_color)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML storage description (default: XWIKI_* environment variables)",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Store JSON documents and attachments as XWiki pages."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIState(config_path=config, verbosity=verbosity, no_color=no_color)


@app.command("list")
def list_command(
    ctx: typer.Context,
    space: Optional[str] = typer.Option(None, "--space", "-s", help="Space to list (default: configured space)"),
    include_docs: bool = typer.Option(False, "--include-docs", help="Also fetch each document's metadata"),
) -> None:
    """List the documents of a space."""
    response = _run(ctx, "all_docs", options={"space": space, "include_docs": include_docs})
    output = _output(ctx)
    output.print_json(response.to_dict())
    output.print_list_summary(response.data.total_rows, space or "(default)")


@app.command("get")
def get_command(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., metavar="ID", help="Document ID (<space>.<page>)"),
) -> None:
    """Print a document's metadata."""
    response = _run(ctx, "get", params={"_id": doc_id})
    _output(ctx).print_json(response.to_dict())


@app.command("post")
def post_command(
    ctx: typer.Context,
    space: Optional[str] = typer.Option(None, "--space", "-s", help="Space of the new document"),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Metadata as a JSON object"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="File holding the metadata JSON"),
) -> None:
    """Create a document under a generated ID."""
    output = _output(ctx)
    try:
        metadata = _load_metadata(data, file)
    except InputError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    response = _run(ctx, "post", params=metadata, options={"space": space})
    output.print_json(response.to_dict())
    output.success(f"Created document {response.id}")


@app.command("put")
def put_command(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., metavar="ID", help="Document ID (<space>.<page>)"),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Metadata as a JSON object"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="File holding the metadata JSON"),
) -> None:
    """Create or replace a document."""
    output = _output(ctx)
    try:
        metadata = _load_metadata(data, file)
    except InputError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    metadata["_id"] = doc_id
    _run(ctx, "put", params=metadata)
    output.success(f"Stored document {doc_id}")


@app.command("remove")
def remove_command(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., metavar="ID", help="Document ID (<space>.<page>)"),
) -> None:
    """Delete a document."""
    _run(ctx, "remove", params={"_id": doc_id})
    _output(ctx).success(f"Removed document {doc_id}")


@app.command("get-attachment")
def get_attachment_command(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., metavar="ID", help="Document ID (<space>.<page>)"),
    name: str = typer.Argument(..., help="Attachment name"),
    output_path: Optional[str] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
) -> None:
    """Download an attachment."""
    response = _run(ctx, "get_attachment", params={"_id": doc_id, "_attachment": name})

    if output_path is None:
        typer.echo(response.data, nl=False)
        return

    output = _output(ctx)
    try:
        Path(output_path).write_bytes(response.data)
    except OSError as e:
        output.error(f"Cannot write {output_path}: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    output.success(f"Saved {name} ({len(response.data)} bytes) to {output_path}")


@app.command("put-attachment")
def put_attachment_command(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., metavar="ID", help="Document ID (<space>.<page>)"),
    name: str = typer.Argument(..., help="Attachment name"),
    file: str = typer.Argument(..., help="File to upload"),
) -> None:
    """Upload a file as an attachment."""
    output = _output(ctx)
    try:
        blob = Path(file).read_bytes()
    except OSError as e:
        output.error(f"Cannot read {file}: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _run(ctx, "put_attachment", params={"_id": doc_id, "_attachment": name, "_blob": blob})
    output.success(f"Stored attachment {name} on {doc_id}")


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
