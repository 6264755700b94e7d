# Tests for bucketsync.cli
# CLI commands using Click testing

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from rich.console import Console as RichConsole

from bucketsync.cli import cli

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def patched_store(store):
    with patch("bucketsync.cli.credentials_available", return_value=True):
        with patch("bucketsync.cli.create_store", return_value=store) as create_store:
            yield create_store


class TestCliGroup:
    """Tests for main CLI group."""

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "bucketsync" in result.output
        assert "copy" in result.output
        assert "upload" in result.output
        assert "download" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "bucketsync" in result.output

    def test_missing_explicit_config(self, runner, temp_home, temp_dir):
        result = runner.invoke(cli, ["--config", str(temp_dir / "nope.yaml"), "run"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestCopyCommand:
    """Tests for copy command."""

    def test_copy(self, runner, config_file, store, patched_store, sample_config):
        store.add("dev", "images/x.png", b"png")

        result = runner.invoke(cli, ["--config", str(config_file), "copy", "images"])

        assert result.exit_code == 0, result.output
        assert store.calls_of("copy") == [("copy", "dev/images/x.png", "prod", "images/x.png")]
        state = json.loads(Path(sample_config["state_file"]).read_text(encoding="utf-8"))
        assert state == {"devTprod": {"images": {"x.png": True}}}

    def test_copy_bucket_overrides(self, runner, config_file, store, patched_store):
        store.add("staging", "images/x.png", b"png")

        result = runner.invoke(
            cli, ["--config", str(config_file), "copy", "images", "--source", "staging", "--target", "live"]
        )

        assert result.exit_code == 0, result.output
        assert store.buckets["live"]["images/x.png"] == b"png"

    def test_copy_without_target_bucket(self, runner, temp_home, temp_dir, store, patched_store):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("source_bucket: dev\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(config_path), "copy", "images"])

        assert result.exit_code == 1
        assert "target bucket" in result.output
        patched_store.assert_not_called()

    def test_item_errors_do_not_change_exit_code(self, runner, config_file, store, patched_store):
        store.add("dev", "images/x.png", b"png")
        store.fail_head.add("images/x.png")

        result = runner.invoke(cli, ["--config", str(config_file), "copy", "images"])

        assert result.exit_code == 0
        assert "Errors" in result.output

    def test_missing_credentials_exit_1(self, runner, config_file, store):
        with patch("bucketsync.cli.credentials_available", return_value=False):
            with patch("bucketsync.cli.create_store", return_value=store) as create_store:
                result = runner.invoke(cli, ["--config", str(config_file), "copy", "images"])

        assert result.exit_code == 1
        assert "No storage credentials found" in result.output
        create_store.assert_not_called()
        assert store.calls == []

    def test_listing_fault_does_not_change_exit_code(self, runner, config_file, store, patched_store):
        store.fail_list.add("dev")

        result = runner.invoke(cli, ["--config", str(config_file), "copy", "images"])

        assert result.exit_code == 0
        assert "aborted" in result.output


class TestUploadCommand:
    """Tests for upload command."""

    def test_upload_twice(self, runner, config_file, store, patched_store, temp_dir, sample_config):
        site = temp_dir / "site"
        site.mkdir()
        (site / "a.txt").write_text("hello", encoding="utf-8")
        args = ["--config", str(config_file), "upload", str(site)]

        first = runner.invoke(cli, args)
        second = runner.invoke(cli, args)

        assert first.exit_code == 0, first.output
        assert second.exit_code == 0, second.output
        assert store.calls_of("put") == [("put", "dev", "a.txt")]
        state = json.loads(Path(sample_config["state_file"]).read_text(encoding="utf-8"))
        assert state == {"dev": {"a.txt": HELLO_SHA256}}

    def test_upload_invalidate(self, runner, config_file, store, patched_store, temp_dir):
        site = temp_dir / "site"
        site.mkdir()
        (site / "a.txt").write_text("hello", encoding="utf-8")
        args = ["--config", str(config_file), "upload", str(site), "--prefix", "web"]

        runner.invoke(cli, args)
        result = runner.invoke(cli, args + ["--invalidate"])

        assert result.exit_code == 0, result.output
        assert store.calls_of("put") == [("put", "dev", "web/a.txt"), ("put", "dev", "web/a.txt")]

    def test_state_file_override(self, runner, config_file, store, patched_store, temp_dir):
        site = temp_dir / "site"
        site.mkdir()
        (site / "a.txt").write_text("hello", encoding="utf-8")
        custom = temp_dir / "custom.json"

        result = runner.invoke(cli, ["--config", str(config_file), "--state-file", str(custom), "upload", str(site)])

        assert result.exit_code == 0, result.output
        assert json.loads(custom.read_text(encoding="utf-8")) == {"dev": {"a.txt": HELLO_SHA256}}


class TestDownloadCommand:
    """Tests for download command."""

    def test_download(self, runner, config_file, store, patched_store, temp_dir):
        store.add("dev", "images/", b"")
        store.add("dev", "images/a.png", b"a")

        result = runner.invoke(cli, ["--config", str(config_file), "download", "images", str(temp_dir / "out")])

        assert result.exit_code == 0, result.output
        assert (temp_dir / "out" / "a.png").read_bytes() == b"a"


class TestRunCommand:
    """Tests for run command."""

    def test_run_jobs(self, runner, config_file, store, patched_store, temp_dir):
        (temp_dir / "images").mkdir()
        (temp_dir / "images" / "a.txt").write_bytes(b"hello")
        store.add("dev", "images/x.png", b"png")

        result = runner.invoke(cli, ["--config", str(config_file), "run"])

        assert result.exit_code == 0, result.output
        assert store.buckets["prod"]["images/x.png"] == b"png"
        assert (temp_dir / "download" / "a.txt").read_bytes() == b"hello"

    def test_run_without_jobs(self, runner, temp_home, temp_dir, patched_store):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("source_bucket: dev\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(config_path), "run"])

        assert result.exit_code == 0
        assert "No jobs configured" in result.output
        patched_store.assert_not_called()


class TestStateCommands:
    """Tests for state commands."""

    @pytest.fixture
    def state_path(self, sample_config) -> Path:
        path = Path(sample_config["state_file"])
        path.write_text(
            json.dumps({"devTprod": {"images": {"x.png": True}}, "dev": {"a.txt": HELLO_SHA256}}),
            encoding="utf-8",
        )
        return path

    def test_show(self, runner, config_file, state_path):
        result = runner.invoke(cli, ["--config", str(config_file), "state", "show"])
        assert result.exit_code == 0, result.output
        assert "devTprod/images/x.png" in result.output
        assert "confirmed" in result.output
        assert "2 entries" in result.output

    def test_show_prefix(self, runner, config_file, state_path):
        result = runner.invoke(cli, ["--config", str(config_file), "state", "show", "--prefix", "dev"])
        assert result.exit_code == 0, result.output
        assert "1 entries" in result.output

    def test_show_prefix_with_trailing_separator(self, runner, config_file, state_path):
        result = runner.invoke(cli, ["--config", str(config_file), "state", "show", "--prefix", "devTprod/"])
        assert result.exit_code == 0, result.output
        assert "devTprod/images/x.png" in result.output
        assert "1 entries" in result.output

    @pytest.mark.parametrize("key", ["/", "", "//"])
    def test_invalidate_empty_key(self, runner, config_file, state_path, key):
        before = state_path.read_text(encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(config_file), "state", "invalidate", key])

        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "must not be empty" in result.output
        assert state_path.read_text(encoding="utf-8") == before

    def test_invalidate(self, runner, config_file, state_path):
        result = runner.invoke(cli, ["--config", str(config_file), "state", "invalidate", "devTprod/images"])
        assert result.exit_code == 0, result.output
        data = json.loads(state_path.read_text(encoding="utf-8"))
        assert data["devTprod"] == {"images": ""}
        assert data["dev"] == {"a.txt": HELLO_SHA256}

    def test_clear_requires_confirmation(self, runner, config_file, state_path):
        result = runner.invoke(cli, ["--config", str(config_file), "state", "clear"], input="n\n")
        assert result.exit_code == 0
        assert "devTprod" in state_path.read_text(encoding="utf-8")

    def test_clear(self, runner, config_file, state_path):
        result = runner.invoke(cli, ["--config", str(config_file), "state", "clear", "--yes"])
        assert result.exit_code == 0, result.output
        assert json.loads(state_path.read_text(encoding="utf-8")) == {}


class TestConfigCommands:
    """Tests for config commands."""

    def test_init(self, runner, temp_home, temp_dir):
        path = temp_dir / "new.yaml"
        result = runner.invoke(cli, ["--config", str(path), "config", "init"])
        assert result.exit_code == 0, result.output
        assert path.exists()

        again = runner.invoke(cli, ["--config", str(path), "config", "init"])
        assert "already exists" in again.output

    def test_show_hides_secrets(self, runner, config_file, monkeypatch):
        monkeypatch.setenv("S3_ID", "AKIAEXAMPLE")
        monkeypatch.setenv("S3_SECRET", "topsecret")

        result = runner.invoke(cli, ["--config", str(config_file), "config", "show"])

        assert result.exit_code == 0, result.output
        assert "topsecret" not in result.output
        assert "AKIAEXAMPLE" not in result.output
        assert "configured" in result.output

    def test_check_valid(self, runner, config_file):
        result = runner.invoke(cli, ["config", "check", str(config_file)])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_check_invalid(self, runner, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("jobs:\n  - kind: upload\n", encoding="utf-8")
        result = runner.invoke(cli, ["config", "check", str(path)])
        assert result.exit_code == 1
        assert "invalid" in result.output

    def test_colored_false_disables_color(self, runner, config_file, monkeypatch):
        fresh = RichConsole()
        monkeypatch.setattr("bucketsync.cli.console", fresh)

        result = runner.invoke(cli, ["--config", str(config_file), "config", "show"])

        assert result.exit_code == 0, result.output
        assert fresh.no_color is True

    def test_colored_true_keeps_color(self, runner, temp_home, temp_dir, monkeypatch):
        fresh = RichConsole(no_color=False)
        monkeypatch.setattr("bucketsync.cli.console", fresh)
        config_path = temp_dir / "config.yaml"
        config_path.write_text("output:\n  colored: true\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(config_path), "config", "show"])

        assert result.exit_code == 0, result.output
        assert fresh.no_color is False
