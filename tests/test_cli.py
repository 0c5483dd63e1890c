"""
Tests for the command-line entry point.
The orchestrator is mocked; these tests cover argument handling and exit codes.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from directupload import cli
from directupload.models.upload import BatchUploadState, FileOutcome


@pytest.fixture
def orchestrator(monkeypatch):
    """Mocked UploadOrchestrator as returned by `async with`."""
    instance = MagicMock()
    instance.__aenter__ = AsyncMock(return_value=instance)
    instance.__aexit__ = AsyncMock(return_value=False)
    instance.upload_file = AsyncMock()
    instance.upload_batch = AsyncMock()
    factory = MagicMock(return_value=instance)
    monkeypatch.setattr(cli, "UploadOrchestrator", factory)
    monkeypatch.setattr(cli, "configure_logging", MagicMock())
    instance.factory = factory
    return instance


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "cover.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n")
    return path


class TestUploadCommand:
    """Tests for `directupload upload`."""

    def test_single_file_success(self, orchestrator, image, capsys):
        """Test the reference is printed and the exit code is 0."""
        orchestrator.upload_file.return_value = "uploads/2024/03/x.png"

        assert cli.main(["upload", str(image), "--name", "renamed.png"]) == 0

        file, name = orchestrator.upload_file.call_args.args
        assert file.name == "cover.png"
        assert name == "renamed.png"
        assert capsys.readouterr().out.strip() == "uploads/2024/03/x.png"

    def test_single_file_failure(self, orchestrator, image, capsys):
        """Test a failed upload prints the error and exits 1."""
        orchestrator.upload_file.return_value = None
        orchestrator.last_error = "Upload thất bại"

        assert cli.main(["upload", str(image)]) == 1
        assert "Upload thất bại" in capsys.readouterr().err

    def test_missing_file(self, orchestrator, tmp_path, capsys):
        """Test an unreadable path fails before any upload."""
        assert cli.main(["upload", str(tmp_path / "missing.png")]) == 1
        orchestrator.factory.assert_not_called()
        assert "ERROR" in capsys.readouterr().err

    def test_batch(self, orchestrator, tmp_path, capsys):
        """Test a batch prints one line per file and fails on any failure."""
        paths = []
        for name in ("a.png", "b.png"):
            path = tmp_path / name
            path.write_bytes(b"x")
            paths.append(str(path))
        orchestrator.upload_batch.return_value = BatchUploadState(outcomes=[
            FileOutcome(index=0, filename="1_0_a.png", storage_reference="ka"),
            FileOutcome(index=1, filename="1_1_b.png", error_message="Upload thất bại"),
        ])

        assert cli.main(["upload", *paths]) == 1

        captured = capsys.readouterr()
        assert captured.out.strip() == "ka"
        assert "b.png: Upload thất bại" in captured.err

    def test_name_with_many_files(self, orchestrator, image):
        """Test --name is refused for batches."""
        with pytest.raises(SystemExit):
            cli.main(["upload", str(image), str(image), "--name", "x.png"])

    def test_overrides(self, orchestrator, image):
        """Test flags override the loaded settings."""
        orchestrator.upload_file.return_value = "k"

        cli.main(["upload", str(image), "--token", "t0k", "--api-url", "http://api.test", "--no-validate"])

        settings = orchestrator.factory.call_args.kwargs["settings"]
        assert settings.access_token == "t0k"
        assert settings.api_base_url == "http://api.test"
        assert settings.validate_batch_uploads is False


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])

    def test_serve_defaults(self):
        args = cli.build_parser().parse_args(["serve"])
        assert args.host == "127.0.0.1"
        assert args.port == 8000
