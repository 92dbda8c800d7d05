"""
Tests for the command-line entry point.
"""

import httpx
import pytest
from dependency_injector import providers

from sweagle_step.__main__ import build_parser, run_application
from sweagle_step.infrastructure.containers import Container


@pytest.fixture
def container_with(captured):
    """Create a container whose HTTP client is served by a fake tenant."""

    def _create(status_code: int = 200, text: str = ""):
        handler, requests = captured(status_code=status_code, text=text)
        container = Container()
        container.http_client.override(
            providers.Object(
                httpx.AsyncClient(transport=httpx.MockTransport(handler))
            )
        )
        return container, requests

    return _create


def parse(*argv):
    return build_parser().parse_args(
        ["--url", "https://tenant.sweagle.test", "--token", "t0ken", *argv]
    )


class TestRunApplication:
    """Tests for exit status and output of build steps."""

    @pytest.mark.asyncio
    async def test_threshold_exceeded_exits_with_failure(self, container_with):
        container, requests = container_with(
            text='{"summary":{"errors":5,"warnings":2}}'
        )
        args = parse("validate", "--mds", "prod", "--err-max", "3")

        assert await run_application(args, container) == 1
        assert requests[0].headers["Authorization"] == "Bearer t0ken"

    @pytest.mark.asyncio
    async def test_soft_failure_exits_cleanly(self, container_with, capsys):
        container, _ = container_with(
            text='{"summary":{"errors":5,"warnings":2}}'
        )
        args = parse(
            "validate", "--mds", "prod", "--err-max", "3", "--no-mark-failed"
        )

        assert await run_application(args, container) == 0
        assert '"errors":5' in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_placeholder_token_exits_with_failure(self, container_with):
        container, requests = container_with(text="{}")
        args = build_parser().parse_args(
            ["--url", "https://tenant.sweagle.test", "--token", "YOUR_TOKEN",
             "snapshot", "--mds", "prod"]
        )

        assert await run_application(args, container) == 1
        assert requests == []

    @pytest.mark.asyncio
    async def test_upload_resolves_workspace(
        self, container_with, monkeypatch, tmp_path
    ):
        (tmp_path / "app.props").write_text("k=v", encoding="utf-8")
        monkeypatch.setenv("WORKSPACE", str(tmp_path))
        container, requests = container_with(text='{"status":"OK"}')
        args = parse(
            "upload", "--file", "app.props", "--node-path", "infra",
            "--format", "props",
        )

        assert await run_application(args, container) == 0
        assert requests[0].content == b"k=v"

    @pytest.mark.asyncio
    async def test_export_writes_output(self, container_with, monkeypatch, tmp_path):
        monkeypatch.setenv("WORKSPACE", str(tmp_path))
        container, _ = container_with(text="a: 1\n")
        args = parse(
            "export", "--mds", "prod", "--exporter", "all",
            "--output", "out.yml", "--format", "yaml",
        )

        assert await run_application(args, container) == 0
        assert (tmp_path / "out.yml").read_text(encoding="utf-8") == "a: 1\n"


class TestParser:
    """Tests for argument defaults."""

    def test_validate_defaults(self):
        args = parse("validate", "--mds", "prod")

        assert args.warn_max == -1
        assert args.err_max == -1
        assert args.mark_failed is True
        assert args.show_results is False

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
