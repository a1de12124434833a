"""
Tests for the florist-ops CLI.
"""

from typer.testing import CliRunner

from cli import app
from shared.security.auth import verify_jwt

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_issue_token_is_accepted_by_the_api():
    result = runner.invoke(app, ["issue-token", "florist-3", "--role", "florist", "--name", "Serena"])

    assert result.exit_code == 0
    claims = verify_jwt(result.output.strip().splitlines()[-1])
    assert claims["sub"] == "florist-3"
    assert claims["roles"] == ["FLORIST"]
    assert claims["name"] == "Serena"


def test_issue_token_unknown_role():
    result = runner.invoke(app, ["issue-token", "someone", "--role", "owner"])
    assert result.exit_code == 1


def test_db_init_then_worklist_and_stats():
    assert runner.invoke(app, ["db-init"]).exit_code == 0

    worklist = runner.invoke(app, ["worklist", "2026-03-04", "--user", "florist-1"])
    assert worklist.exit_code == 0
    assert "Total 0" in worklist.output

    stats = runner.invoke(app, ["stats", "--timeframe", "today"])
    assert stats.exit_code == 0
    assert "Maya" in stats.output


def test_worklist_rejects_bad_date():
    result = runner.invoke(app, ["worklist", "04/03/2026"])
    assert result.exit_code == 1
