"""Tests for the svclog command line."""

import json

import pytest
from click.testing import CliRunner

from svclog.cli import cli


@pytest.fixture
def runner(monkeypatch):
    """Click runner with SVCLOG_ variables cleared."""
    for key in ("SVCLOG_LEVEL", "SVCLOG_SERVICE_NAME", "SVCLOG_OUTPUT",
                "SVCLOG_TRACE_CORRELATION"):
        monkeypatch.delenv(key, raising=False)
    return CliRunner()


@pytest.fixture
def out_file(tmp_path):
    return tmp_path / "cli.jsonl"


def read_record(path):
    (line,) = path.read_text(encoding="utf-8").splitlines()
    return json.loads(line)


class TestEmit:
    """Tests for the emit command."""

    def test_emit_to_file(self, runner, out_file):
        """Test a record with typed attributes is written to the file."""
        result = runner.invoke(cli, [
            "emit", "--service", "billing", "--output", str(out_file),
            "Invoice created", "invoice_id=123", "paid=true", "customer=acme",
        ])

        assert result.exit_code == 0, result.output
        record = read_record(out_file)
        assert record["level"] == "INFO"
        assert record["msg"] == "Invoice created"
        assert record["service"] == "billing"
        assert record["invoice_id"] == 123
        assert record["paid"] is True
        assert record["customer"] == "acme"
        assert record["file"].startswith("cli.py:")
        assert "trace_id" not in record

    def test_emit_to_stdout(self, runner):
        result = runner.invoke(cli, ["emit", "--service", "svc", "ready", "port=8080"])

        assert result.exit_code == 0
        record = json.loads(result.output.strip())
        assert record["msg"] == "ready"
        assert record["port"] == 8080

    def test_trace_id(self, runner, out_file):
        result = runner.invoke(cli, [
            "emit", "-o", str(out_file), "--trace-id", "4bf92f35", "m",
        ])

        assert result.exit_code == 0
        assert read_record(out_file)["trace_id"] == "4bf92f35"

    def test_level_below_minimum(self, runner, out_file):
        """Test records below --min-level are not written."""
        result = runner.invoke(cli, [
            "emit", "-o", str(out_file), "--level", "debug", "--min-level", "info", "m",
        ])

        assert result.exit_code == 0
        assert out_file.read_text(encoding="utf-8") == ""

    def test_env_defaults(self, runner, out_file, monkeypatch):
        monkeypatch.setenv("SVCLOG_SERVICE_NAME", "from-env")
        monkeypatch.setenv("SVCLOG_OUTPUT", str(out_file))
        monkeypatch.setenv("SVCLOG_LEVEL", "ERROR")

        runner.invoke(cli, ["emit", "--level", "WARN", "filtered"])
        result = runner.invoke(cli, ["emit", "--level", "ERROR", "kept"])

        assert result.exit_code == 0
        record = read_record(out_file)
        assert record["msg"] == "kept"
        assert record["service"] == "from-env"

    def test_bare_attribute_rejected(self, runner, out_file):
        result = runner.invoke(cli, ["emit", "-o", str(out_file), "m", "reason"])

        assert result.exit_code == 2
        assert "KEY=VALUE" in result.output

    def test_bad_output(self, runner, tmp_path):
        result = runner.invoke(cli, [
            "emit", "-o", str(tmp_path / "missing" / "x.log"), "m",
        ])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
