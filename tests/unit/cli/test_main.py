"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import json
import logging

import pytest
from unittest.mock import MagicMock, patch
from pydantic import BaseModel
from typer.testing import CliRunner

from src.cli.errors import SchemaImportError
from src.cli.main import (
    _configure_logging,
    _exit_code_for,
    _load_config,
    _load_schema,
    app,
)
from src.cli.models import ExitCode
from src.content_tree.errors import (
    ConfigError,
    FrontmatterError,
    FrontmatterValidationError,
    PathNotFoundError,
    UnexpectedResponseShapeError,
)
from src.content_tree.models import (
    ContentRecord,
    FieldViolation,
    PathParts,
    RepositoryConfig,
    TocEntry,
)
from src.github_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    ResourceNotFoundError,
)


runner = CliRunner()


def sample_record(content=None):
    return ContentRecord(
        path=PathParts(dir="docs", name="intro", ext=".md"),
        full_path="docs/intro.md",
        filename="intro.md",
        id="abc1234def",
        byte_size=1200,
        url="https://api.github.com/repos/octo/docs/git/blobs/abc1234def",
        title="Intro",
        reading_time=2,
        created="2023-01-01T00:00:00Z",
        updated="2024-01-01T00:00:00Z",
        frontmatter={"tags": ["a"]},
        toc=[TocEntry(title="Intro", anchor="#intro", children=[TocEntry(title="Setup", anchor="#setup")])],
        content=content,
    )


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    def test_verbosity_0_sets_warning_level(self):
        """Verbosity 0 sets logging to WARNING level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(0)

            mock_app_logger.setLevel.assert_called_with(logging.WARNING)

    def test_verbosity_1_sets_info_level(self):
        """Verbosity 1 sets logging to INFO level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(1)

            mock_app_logger.setLevel.assert_called_with(logging.INFO)

    def test_verbosity_2_sets_debug_level(self):
        """Verbosity 2+ sets logging to DEBUG level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(3)

            mock_app_logger.setLevel.assert_called_with(logging.DEBUG)

    def test_logdir_creates_log_file(self, tmp_path):
        """A timestamped log file is created in logdir."""
        logdir = tmp_path / "logs"

        _configure_logging(1, str(logdir))
        app_logger = logging.getLogger("src")
        try:
            files = list(logdir.glob("gitcms_*.log"))
            assert len(files) == 1
        finally:
            for handler in list(app_logger.handlers):
                handler.close()
                app_logger.removeHandler(handler)
            app_logger.setLevel(logging.NOTSET)

    def test_repeated_calls_do_not_duplicate_handlers(self):
        app_logger = logging.getLogger("src")
        try:
            _configure_logging(0)
            _configure_logging(0)
            assert len(app_logger.handlers) == 1
        finally:
            for handler in list(app_logger.handlers):
                app_logger.removeHandler(handler)
            app_logger.setLevel(logging.NOTSET)


class TestExitCodes:
    """Test cases for error to exit code mapping."""

    @pytest.mark.parametrize('error,code', [
        (InvalidCredentialsError(owner="o", repo="r"), ExitCode.AUTH_ERROR),
        (APIUnreachableError(endpoint="https://api.github.com"), ExitCode.NETWORK_ERROR),
        (PathNotFoundError(path="a/b", segment="b"), ExitCode.NOT_FOUND),
        (ResourceNotFoundError(resource="x"), ExitCode.NOT_FOUND),
        (UnexpectedResponseShapeError(path="docs", reason="path is a directory"), ExitCode.NOT_FOUND),
        (FrontmatterError("a.md", "bad"), ExitCode.VALIDATION_ERROR),
        (FrontmatterValidationError("a.md", []), ExitCode.VALIDATION_ERROR),
        (APIAccessError("boom", status_code=500), ExitCode.GENERAL_ERROR),
        (ConfigError("bad"), ExitCode.GENERAL_ERROR),
        (ValueError("bad sort"), ExitCode.GENERAL_ERROR),
    ])
    def test_mapping(self, error, code):
        assert _exit_code_for(error) == code


class TestLoadSchema:
    """Test cases for _load_schema."""

    def test_none(self):
        assert _load_schema(None) is None

    def test_valid_reference(self):
        assert _load_schema("pydantic:BaseModel") is BaseModel

    def test_missing_separator(self):
        with pytest.raises(SchemaImportError):
            _load_schema("pydantic.BaseModel")

    def test_unknown_module(self):
        with pytest.raises(SchemaImportError) as exc_info:
            _load_schema("no_such_module_xyz:Model")

        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_not_a_model(self):
        with pytest.raises(SchemaImportError):
            _load_schema("src.content_tree.models:RepositoryConfig")


class TestLoadConfig:
    """Test cases for _load_config."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert _load_config(None) == RepositoryConfig()

    def test_default_file_used_when_present(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".gitcms.yaml").write_text("src_path: docs\n", encoding="utf-8")

        assert _load_config(None).src_path == "docs"

    def test_explicit_path(self, tmp_path):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("ref: develop\n", encoding="utf-8")

        assert _load_config(str(config_file)).ref == "develop"


@patch('src.cli.main._configure_logging')
@patch('src.cli.main.Authenticator')
@patch('src.cli.main.ContentRepository')
class TestListCommand:
    """Test cases for the list command."""

    def test_table_output(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.return_value = [sample_record()]

        result = runner.invoke(app, ["--no-color", "list"])

        assert result.exit_code == 0
        assert "docs/intro.md" in result.output
        assert "1 document(s)" in result.output

    def test_options_forwarded(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.return_value = []

        result = runner.invoke(app, [
            "list", "--path", "docs", "--ext", ".md", "--ext", ".mdx",
            "--recursive", "--no-content", "--ascending", "--sort-by", "updated",
        ])

        assert result.exit_code == 0
        mock_repo_cls.return_value.list_items.assert_called_once_with(
            extensions=[".md", ".mdx"],
            path="docs",
            recursive=True,
            include_content=False,
            ascending=True,
            sort_by="updated",
        )

    def test_defaults_deferred_to_config(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.return_value = []

        runner.invoke(app, ["list"])

        kwargs = mock_repo_cls.return_value.list_items.call_args[1]
        assert kwargs["extensions"] is None
        assert kwargs["path"] is None
        assert kwargs["recursive"] is None

    def test_empty_listing(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.return_value = []

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No documents found" in result.output

    def test_json_output(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.return_value = [sample_record(content="# Intro\n")]

        result = runner.invoke(app, ["list", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data[0]["full_path"] == "docs/intro.md"
        assert data[0]["content"] == "# Intro\n"
        assert data[0]["toc"][0]["children"][0]["anchor"] == "#setup"

    def test_config_file_passed_to_repository(self, mock_repo_cls, mock_auth, mock_logging, tmp_path):
        config_file = tmp_path / "c.yaml"
        config_file.write_text("src_path: content\nrecursive: true\n", encoding="utf-8")
        mock_repo_cls.return_value.list_items.return_value = []

        result = runner.invoke(app, ["--config", str(config_file), "list"])

        assert result.exit_code == 0
        config = mock_repo_cls.call_args[0][1]
        assert config.src_path == "content"
        assert config.recursive is True

    def test_missing_config_file(self, mock_repo_cls, mock_auth, mock_logging, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "list"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        mock_repo_cls.assert_not_called()

    def test_path_not_found(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.side_effect = PathNotFoundError(path="nope", segment="nope")

        result = runner.invoke(app, ["list", "--path", "nope"])

        assert result.exit_code == ExitCode.NOT_FOUND
        assert "nope" in result.output

    def test_missing_credentials(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.side_effect = InvalidCredentialsError(
            owner="unknown", repo="unknown", missing=["GITHUB_TOKEN"]
        )

        result = runner.invoke(app, ["list"])

        assert result.exit_code == ExitCode.AUTH_ERROR

    def test_validation_violations_reported(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.side_effect = FrontmatterValidationError(
            "a.md", [FieldViolation(location="desc", message="Field required", error_type="missing")]
        )

        result = runner.invoke(app, ["list"])

        assert result.exit_code == ExitCode.VALIDATION_ERROR
        assert "desc: Field required" in result.output

    def test_invalid_sort_field(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.side_effect = ValueError("sort_by must be one of")

        result = runner.invoke(app, ["list", "--sort-by", "title"])

        assert result.exit_code == ExitCode.GENERAL_ERROR

    def test_schema_passed_to_repository(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.list_items.return_value = []

        result = runner.invoke(app, ["list", "--schema", "pydantic:BaseModel"])

        assert result.exit_code == 0
        assert mock_repo_cls.call_args[0][2] is BaseModel

    def test_bad_schema_reference(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["list", "--schema", "no_such_module_xyz:Model"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        mock_repo_cls.assert_not_called()


@patch('src.cli.main._configure_logging')
@patch('src.cli.main.Authenticator')
@patch('src.cli.main.ContentRepository')
class TestShowCommand:
    """Test cases for the show command."""

    def test_show_record(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.get_item_by_path.return_value = sample_record()

        result = runner.invoke(app, ["--no-color", "show", "docs/intro.md"])

        assert result.exit_code == 0
        mock_repo_cls.return_value.get_item_by_path.assert_called_once_with("docs/intro.md")
        assert "Setup" in result.output
        assert "#setup" in result.output

    def test_show_json(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.get_item_by_path.return_value = sample_record()

        result = runner.invoke(app, ["show", "docs/intro.md", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["title"] == "Intro"

    def test_directory_path(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.get_item_by_path.side_effect = UnexpectedResponseShapeError(
            path="docs", reason="path is a directory"
        )

        result = runner.invoke(app, ["show", "docs"])

        assert result.exit_code == ExitCode.NOT_FOUND

    def test_network_failure(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.get_item_by_path.side_effect = APIUnreachableError(
            endpoint="https://api.github.com"
        )

        result = runner.invoke(app, ["show", "docs/intro.md"])

        assert result.exit_code == ExitCode.NETWORK_ERROR


@patch('src.cli.main._configure_logging')
@patch('src.cli.main.Authenticator')
@patch('src.cli.main.ContentRepository')
class TestRawCommand:
    """Test cases for the raw command."""

    def test_prints_raw_text(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.get_raw_content.return_value = "---\ntitle: x\n---\n# X\n"

        result = runner.invoke(app, ["raw", "abc123"])

        assert result.exit_code == 0
        assert result.stdout == "---\ntitle: x\n---\n# X\n"
        mock_repo_cls.return_value.get_raw_content.assert_called_once_with("abc123")

    def test_unknown_blob(self, mock_repo_cls, mock_auth, mock_logging, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        mock_repo_cls.return_value.get_raw_content.side_effect = ResourceNotFoundError(resource="abc123")

        result = runner.invoke(app, ["raw", "abc123"])

        assert result.exit_code == ExitCode.NOT_FOUND


class TestHelp:
    """Test cases for help output."""

    def test_no_arguments_shows_help(self):
        result = runner.invoke(app, [])

        assert "list" in result.output
        assert "show" in result.output
        assert "raw" in result.output
