"""Main CLI entry point for the gitcms command.

This module provides the Typer application that lists, shows and prints
markdown documents stored in a GitHub repository. Credentials come from the
environment (GITHUB_TOKEN, GITHUB_OWNER, GITHUB_REPO or a .env file).
"""

import importlib
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Type

import typer
from pydantic import BaseModel

from src.cli.errors import SchemaImportError
from src.cli.models import CLIContext, ExitCode
from src.cli.output import OutputHandler
from src.content_tree.config_loader import ConfigLoader
from src.content_tree.content_repository import ContentRepository
from src.content_tree.errors import (
    FrontmatterError,
    PathNotFoundError,
    UnexpectedResponseShapeError,
)
from src.content_tree.models import RepositoryConfig
from src.github_client.auth import Authenticator
from src.github_client.errors import (
    APIUnreachableError,
    GitCMSError,
    InvalidCredentialsError,
    ResourceNotFoundError,
)

app = typer.Typer(
    name="gitcms",
    help="""List markdown documents stored in a GitHub repository.

QUICK START:
  gitcms list                          # Documents in the configured folder
  gitcms list --path docs --recursive  # Whole docs/ tree
  gitcms show docs/intro.md            # One document with its outline
  gitcms raw <sha>                     # Raw text of a blob""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"gitcms_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _load_schema(reference: Optional[str]) -> Optional[Type[BaseModel]]:
    """Import a pydantic model from a 'module:ClassName' reference.

    Raises:
        SchemaImportError: If the module or class cannot be loaded
    """
    if not reference:
        return None

    module_name, _, class_name = reference.partition(":")
    if not module_name or not class_name:
        raise SchemaImportError(reference, "expected the form 'module:ClassName'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise SchemaImportError(reference, str(e)) from e

    schema = getattr(module, class_name, None)
    if not isinstance(schema, type) or not issubclass(schema, BaseModel):
        raise SchemaImportError(reference, f"'{class_name}' is not a pydantic model")
    return schema


def _load_config(config_path: Optional[str]) -> RepositoryConfig:
    """Load the repository configuration, falling back to defaults.

    An explicit path must exist; the default .gitcms.yaml is optional.
    """
    if config_path:
        return ConfigLoader.load(config_path)
    if Path(ConfigLoader.DEFAULT_CONFIG_FILE).exists():
        return ConfigLoader.load(ConfigLoader.DEFAULT_CONFIG_FILE)
    return RepositoryConfig()


def _exit_code_for(error: Exception) -> ExitCode:
    """Map an error to the exit code reported to the shell."""
    if isinstance(error, InvalidCredentialsError):
        return ExitCode.AUTH_ERROR
    if isinstance(error, APIUnreachableError):
        return ExitCode.NETWORK_ERROR
    if isinstance(error, (PathNotFoundError, ResourceNotFoundError, UnexpectedResponseShapeError)):
        return ExitCode.NOT_FOUND
    if isinstance(error, FrontmatterError):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.GENERAL_ERROR


def _build_repository(ctx_obj: CLIContext, schema_ref: Optional[str]) -> ContentRepository:
    config = _load_config(ctx_obj.config_path)
    schema = _load_schema(schema_ref)
    return ContentRepository(Authenticator(), config, schema)


def _fail(output: OutputHandler, error: Exception) -> None:
    """Report an error and exit with the matching code."""
    logger.error(f"{type(error).__name__}: {error}")
    output.error(str(error))
    for violation in getattr(error, "violations", None) or []:
        output.error(f"  {violation.location or '<root>'}: {violation.message}")
    raise typer.Exit(_exit_code_for(error))


def _echo_json(data) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Repository configuration file (default: .gitcms.yaml if present)",
        metavar="FILE",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v info, -vv debug)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """List markdown documents stored in a GitHub repository."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIContext(
        config_path=config_path,
        verbosity=verbosity,
        logdir=logdir,
        no_color=no_color,
    )


@app.command("list")
def list_command(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(
        None,
        "--path",
        "-p",
        help="Folder to list (default: src_path from the configuration)",
    ),
    extensions: Optional[List[str]] = typer.Option(
        None,
        "--ext",
        "-e",
        help="File extension to include (repeatable, default: .md)",
    ),
    recursive: Optional[bool] = typer.Option(
        None,
        "--recursive/--no-recursive",
        "-r",
        help="Descend into subdirectories",
    ),
    no_content: bool = typer.Option(
        False,
        "--no-content",
        help="Leave document bodies out of JSON output",
    ),
    ascending: bool = typer.Option(
        False,
        "--ascending",
        help="Oldest first (default: newest first)",
    ),
    sort_by: str = typer.Option(
        "created",
        "--sort-by",
        help="Date to sort by: created or updated",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print records as JSON",
    ),
    schema_ref: Optional[str] = typer.Option(
        None,
        "--schema",
        help="Pydantic model validating frontmatter, as module:ClassName",
    ),
) -> None:
    """List enriched documents below a folder."""
    options: CLIContext = ctx.obj
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)

    try:
        repository = _build_repository(options, schema_ref)
        with output.spinner("Listing documents..."):
            records = repository.list_items(
                extensions=extensions or None,
                path=path,
                recursive=recursive,
                include_content=not no_content,
                ascending=ascending,
                sort_by=sort_by,
            )
    except (GitCMSError, ValueError) as e:
        _fail(output, e)

    if as_json:
        _echo_json([record.to_dict() for record in records])
    else:
        output.print_records(records, sort_by=sort_by)

    raise typer.Exit(ExitCode.SUCCESS)


@app.command("show")
def show_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Repository path of the document"),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the record as JSON",
    ),
    schema_ref: Optional[str] = typer.Option(
        None,
        "--schema",
        help="Pydantic model validating frontmatter, as module:ClassName",
    ),
) -> None:
    """Show one document with its metadata and outline."""
    options: CLIContext = ctx.obj
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)

    try:
        repository = _build_repository(options, schema_ref)
        with output.spinner(f"Fetching {path}..."):
            record = repository.get_item_by_path(path)
    except (GitCMSError, ValueError) as e:
        _fail(output, e)

    if as_json:
        _echo_json(record.to_dict())
    else:
        output.print_record(record)

    raise typer.Exit(ExitCode.SUCCESS)


@app.command("raw")
def raw_command(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., help="Blob sha of the document"),
) -> None:
    """Print the raw text of a document, frontmatter included."""
    options: CLIContext = ctx.obj
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)

    try:
        repository = _build_repository(options, None)
        content = repository.get_raw_content(item_id)
    except (GitCMSError, ValueError) as e:
        _fail(output, e)

    typer.echo(content, nl=not content.endswith("\n"))
    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
