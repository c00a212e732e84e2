"""記録CLI の動作テスト"""

import json
import subprocess
import sys
from pathlib import Path


def run_cli(args: list[str], db_path: Path) -> subprocess.CompletedProcess:
    """CLI実行ヘルパー"""
    cmd = [sys.executable, "-m", "src.records", "--db-path", str(db_path)] + args
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
    )


def test_cli_list_empty(tmp_path):
    result = run_cli(["list", "--format", "json"], tmp_path / "cli.db")
    assert result.returncode == 0
    assert json.loads(result.stdout) == []


def test_cli_add_edit_move_delete(tmp_path):
    db_path = tmp_path / "cli.db"

    result = run_cli(
        ["add", "--text", "Morning walk", "--date", "2023-08-15", "--format", "json"], db_path
    )
    assert result.returncode == 0
    added = json.loads(result.stdout)
    assert added["text"] == "Morning walk"
    assert added["date"] == "2023-08-15"
    assert added["has_image"] is False
    record_id = added["id"]

    result = run_cli(
        ["edit", "--id", str(record_id), "--text", "Morning run", "--format", "json"], db_path
    )
    assert result.returncode == 0
    assert json.loads(result.stdout)["text"] == "Morning run"

    result = run_cli(
        ["move", "--id", str(record_id), "--date", "2023-08-16", "--format", "json"], db_path
    )
    assert result.returncode == 0
    assert json.loads(result.stdout)["date"] == "2023-08-16"

    result = run_cli(["list", "--date", "2023-08-16", "--format", "json"], db_path)
    assert [item["id"] for item in json.loads(result.stdout)] == [record_id]

    result = run_cli(["delete", "--id", str(record_id), "--format", "json"], db_path)
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"deleted": True, "id": record_id}


def test_cli_add_with_image(tmp_path):
    image = tmp_path / "photo.png"
    image.write_bytes(b"\x89PNG\r\n")
    result = run_cli(
        ["add", "--image-file", str(image), "--date", "2023-08-15", "--format", "json"],
        tmp_path / "cli.db",
    )
    assert result.returncode == 0
    assert json.loads(result.stdout)["has_image"] is True


def test_cli_rejects_empty_record(tmp_path):
    result = run_cli(["add", "--text", "   "], tmp_path / "cli.db")
    assert result.returncode == 1
    assert "Error" in result.stderr


def test_cli_missing_record(tmp_path):
    result = run_cli(["delete", "--id", "999"], tmp_path / "cli.db")
    assert result.returncode == 1
    assert "not found" in result.stderr


def test_cli_summary(tmp_path):
    db_path = tmp_path / "cli.db"
    run_cli(["add", "--text", "Morning walk for 30 minutes", "--date", "2023-08-15"], db_path)

    result = run_cli(["summary", "--date", "2023-08-15", "--format", "json"], db_path)
    assert result.returncode == 0
    payload = json.loads(result.stdout)
    assert payload["summary"].startswith("Today was a balanced day with 1 recorded activities.")
    assert payload["day_type"] == "balanced"

    result = run_cli(["summary", "--date", "2023-08-20"], db_path)
    assert result.stdout.strip() == "No activities recorded for this day."


def test_cli_calendar(tmp_path):
    db_path = tmp_path / "cli.db"
    run_cli(["add", "--text", "Walk", "--date", "2023-08-15"], db_path)

    result = run_cli(["calendar", "--year", "2023", "--month", "8"], db_path)
    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert lines[0].strip() == "August 2023"
    assert lines[1] == "Su Mo Tu We Th Fr Sa"
    assert any(line.endswith("* 15") for line in lines)


def test_cli_calendar_rejects_out_of_range_year(tmp_path):
    result = run_cli(["calendar", "--year", "0", "--month", "8"], tmp_path / "cli.db")
    assert result.returncode == 1
    assert "year must be between 1 and 9999" in result.stderr
    assert "Traceback" not in result.stderr

    result = run_cli(["calendar", "--year", "10000", "--month", "1"], tmp_path / "cli.db")
    assert result.returncode == 1
