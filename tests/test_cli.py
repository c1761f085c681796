"""Tests for the command-line interface."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from docscope.cli import EXIT_FAILED, EXIT_INVALID_URL, EXIT_OK, build_config, create_parser, main
from docscope.errors import SymbolNotFound
from docscope.models.result import ExtractionResult, PassName

URL = "https://docs.example.com/api"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["DOCSCOPE_TIMEOUT", "DOCSCOPE_USER_AGENT", "DOCSCOPE_VERBOSE", "DOCSCOPE_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)


def make_result(content="<p>createUser makes a user</p>") -> ExtractionResult:
    return ExtractionResult(
        content=content,
        url=URL,
        symbol="createUser",
        produced_by=PassName.TARGETED,
        fragments=(content,),
    )


def patched_extractor(result=None, error=None):
    """Patch DocExtractor in the CLI with an async context manager mock."""
    extractor = MagicMock()
    if error is not None:
        extractor.extract = AsyncMock(side_effect=error)
    else:
        extractor.extract = AsyncMock(return_value=result)

    patcher = patch("docscope.cli.DocExtractor")
    extractor_cls = patcher.start()
    extractor_cls.return_value.__aenter__ = AsyncMock(return_value=extractor)
    extractor_cls.return_value.__aexit__ = AsyncMock(return_value=None)
    return patcher, extractor_cls, extractor


class TestMain:
    """Tests for main()."""

    def test_prints_content_to_stdout(self, capsys):
        patcher, _, extractor = patched_extractor(make_result())
        try:
            code = main([URL, "--symbol", "createUser", "--quiet"])
        finally:
            patcher.stop()

        assert code == EXIT_OK
        assert capsys.readouterr().out == "<p>createUser makes a user</p>\n"
        extractor.extract.assert_awaited_once_with(URL, "createUser")

    def test_markdown_output(self, capsys):
        patcher, _, _ = patched_extractor(make_result())
        try:
            code = main([URL, "-s", "createUser", "-q", "--markdown"])
        finally:
            patcher.stop()

        assert code == EXIT_OK
        assert capsys.readouterr().out == "createUser makes a user\n"

    def test_writes_output_file(self, tmp_path, capsys):
        output = tmp_path / "createUser.html"
        patcher, _, _ = patched_extractor(make_result())
        try:
            code = main([URL, "-s", "createUser", "-q", "-o", str(output)])
        finally:
            patcher.stop()

        assert code == EXIT_OK
        assert output.read_text(encoding="utf-8") == "<p>createUser makes a user</p>\n"
        assert capsys.readouterr().out == ""

    def test_extraction_failure_exit_code(self, capsys):
        patcher, _, _ = patched_extractor(error=SymbolNotFound("createUser"))
        try:
            code = main([URL, "-s", "createUser", "-q"])
        finally:
            patcher.stop()

        assert code == EXIT_FAILED
        assert "not found in the documentation" in capsys.readouterr().err

    def test_flags_reach_extractor_config(self):
        patcher, extractor_cls, _ = patched_extractor(make_result())
        try:
            main([URL, "-q", "--no-fallback", "--no-title", "--timeout", "7"])
        finally:
            patcher.stop()

        config = extractor_cls.call_args.args[0]
        assert config.extraction.fallback is False
        assert config.extraction.include_title is False
        assert config.network.timeout == 7.0

    def test_invalid_url_exit_code(self, capsys):
        code = main(["not a url", "-q"])

        assert code == EXIT_INVALID_URL
        assert "Invalid URL" in capsys.readouterr().err

    def test_bad_config_file(self, tmp_path):
        config_file = tmp_path / "docscope.yaml"
        config_file.write_text("network:\n  retries: 3\n")

        assert main([URL, "-q", "--config", str(config_file)]) == EXIT_FAILED


class TestBuildConfig:
    """Tests for configuration layering."""

    def test_defaults(self):
        config = build_config(create_parser().parse_args([URL]))

        assert config.network.timeout == 30.0
        assert config.extraction.fallback is True
        assert config.verbose is False

    def test_file_then_env_then_flags(self, tmp_path, monkeypatch):
        config_file = tmp_path / "docscope.yaml"
        config_file.write_text("network:\n  timeout: 10\n  user_agent: from-file\n")
        monkeypatch.setenv("DOCSCOPE_TIMEOUT", "20")

        args = create_parser().parse_args([URL, "-c", str(config_file)])
        assert build_config(args).network.timeout == 20.0
        assert build_config(args).network.user_agent == "from-file"

        args = create_parser().parse_args([URL, "-c", str(config_file), "-t", "5", "--user-agent", "cli"])
        config = build_config(args)
        assert config.network.timeout == 5.0
        assert config.network.user_agent == "cli"

    def test_quiet_raises_log_level(self):
        config = build_config(create_parser().parse_args([URL, "-q"]))
        assert config.log_level == "ERROR"

    def test_verbose(self):
        config = build_config(create_parser().parse_args([URL, "-v"]))
        assert config.verbose is True
