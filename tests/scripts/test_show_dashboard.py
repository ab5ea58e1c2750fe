"""
Tests for the show_dashboard command-line script.

Covers:
- Exit code 0 and the JSON dashboard for a seeded project
- Exit code 1 with a one-line JSON error for an unknown project, a failed
  overview read and an invalid threshold file
"""

import importlib.util
import json
from pathlib import Path

import pytest
import yaml
from sqlalchemy import create_engine, text

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "show_dashboard.py"


@pytest.fixture(scope="module")
def show_dashboard():
    spec = importlib.util.spec_from_file_location("show_dashboard", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def run(show_dashboard, monkeypatch, capsys):
    """Run main() with the given arguments; returns (exit_code, parsed stdout)."""

    def _run(*argv):
        monkeypatch.setattr("sys.argv", ["show_dashboard.py", *argv])
        code = show_dashboard.main()
        return code, json.loads(capsys.readouterr().out)

    return _run


class TestSuccess:
    def test_prints_dashboard(self, run, seeded_database_url):
        code, payload = run(
            "--database-url", seeded_database_url,
            "--project-id", "P-1",
            "--today", "2025-01-20",
        )

        assert code == 0
        assert payload["as_of"] == "2025-01-20"
        assert payload["summary"]["name"] == "Apollo Migration"
        assert payload["summary"]["budget"] == "$100K"
        assert payload["summary"]["team_count"] == 4
        assert payload["degraded_fields"] == []

    def test_overview_only_project(self, run, seeded_database_url):
        code, payload = run(
            "--database-url", seeded_database_url,
            "--project-id", "P-2",
            "--today", "2025-01-20",
        )

        assert code == 0
        assert payload["summary"]["name"] == "Placeholder"
        assert payload["summary"]["team_count"] == 0


class TestErrors:
    def test_unknown_project(self, run, seeded_database_url):
        code, payload = run(
            "--database-url", seeded_database_url,
            "--project-id", "P-404",
            "--today", "2025-01-20",
        )

        assert code == 1
        assert payload == {"error": "PROJECT_NOT_FOUND", "project_id": "P-404"}

    def test_overview_read_failure(self, run, seeded_database_url):
        engine = create_engine(seeded_database_url)
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE vw_project_overview"))
        engine.dispose()

        code, payload = run(
            "--database-url", seeded_database_url,
            "--project-id", "P-1",
            "--today", "2025-01-20",
        )

        assert code == 1
        assert payload["error"] == "FACT_QUERY_FAILED"
        assert payload["query_name"] == "project_overview"
        assert payload["project_id"] == "P-1"
        assert "vw_project_overview" in payload["message"]

    def test_invalid_threshold_file(self, run, seeded_database_url, tmp_path):
        config = tmp_path / "thresholds.yaml"
        config.write_text(yaml.safe_dump({
            "config_id": "bad", "budget": {"low_buffer_percent": 150},
        }))

        code, payload = run(
            "--database-url", seeded_database_url,
            "--project-id", "P-1",
            "--config", str(config),
        )

        assert code == 1
        assert payload["error"] == "INVALID_THRESHOLD"
        assert "low_buffer_percent" in payload["message"]
