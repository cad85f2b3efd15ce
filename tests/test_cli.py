"""Tests for the md2adf CLI commands."""

import io
import json
import subprocess
import sys
import tempfile
from pathlib import Path

import pytest

from md2adf.cli import main


def run_cli(*args, input=None, cwd=None):
    return subprocess.run(
        [sys.executable, "-m", "md2adf", *args],
        input=input,
        capture_output=True,
        text=True,
        cwd=cwd,
    )


def test_convert_file():
    """Test converting a Markdown file with a mention."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "comment.md"
        path.write_text("## Update\n\nHi @[abc123:Jane Doe]\n", encoding="utf-8")

        result = run_cli("convert", str(path), cwd=tmpdir)

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["type"] == "doc"
        assert [n["type"] for n in data["content"]] == ["heading", "paragraph"]
        assert data["content"][1]["content"][1] == {
            "type": "mention",
            "attrs": {"id": "abc123", "text": "@Jane Doe", "userType": "APP"},
        }


def test_convert_stdin_compact():
    """Test reading stdin and single-line output."""
    with tempfile.TemporaryDirectory() as tmpdir:
        result = run_cli("convert", "--compact", input="**hi**", cwd=tmpdir)

        assert result.returncode == 0
        assert result.stdout.count("\n") == 1
        data = json.loads(result.stdout)
        assert data["content"][0]["content"][0]["marks"] == [{"type": "strong"}]


def test_convert_strips_frontmatter():
    """Test a leading YAML block is dropped unless asked to keep it."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "note.md"
        path.write_text("---\ntitle: Note\n---\nBody\n", encoding="utf-8")

        result = run_cli("convert", str(path), cwd=tmpdir)
        data = json.loads(result.stdout)
        assert data["content"] == [
            {"type": "paragraph", "content": [{"type": "text", "text": "Body"}]}
        ]

        kept = run_cli("convert", "--keep-frontmatter", str(path), cwd=tmpdir)
        kept_types = [n["type"] for n in json.loads(kept.stdout)["content"]]
        assert kept_types[0] == "rule"


def test_convert_flags(capsys, monkeypatch, tmp_path):
    """Test --no-mentions and --detect in process."""
    monkeypatch.chdir(tmp_path)

    monkeypatch.setattr(sys, "stdin", io.StringIO("Hi @[abc123:Jane]"))
    with pytest.raises(SystemExit) as exc:
        main(["convert", "--no-mentions", "--compact"])
    assert exc.value.code == 0
    leaves = json.loads(capsys.readouterr().out)["content"][0]["content"]
    assert leaves == [{"type": "text", "text": "Hi @[abc123:Jane]"}]

    monkeypatch.setattr(sys, "stdin", io.StringIO("plain *words"))
    with pytest.raises(SystemExit):
        main(["convert", "--detect", "--compact"])
    leaves = json.loads(capsys.readouterr().out)["content"][0]["content"]
    assert leaves == [{"type": "text", "text": "plain *words"}]


def test_detect_command():
    """Test detect output modes and exit status."""
    with tempfile.TemporaryDirectory() as tmpdir:
        result = run_cli("detect", input="## Title", cwd=tmpdir)
        assert result.returncode == 0
        assert result.stdout.strip() == "markdown"

        result = run_cli("detect", input="just words", cwd=tmpdir)
        assert result.returncode == 0
        assert result.stdout.strip() == "plain"

        result = run_cli("detect", "--json", input="- item", cwd=tmpdir)
        assert json.loads(result.stdout) == {"markdown": True}

        assert run_cli("-q", "detect", input="**x**", cwd=tmpdir).returncode == 0
        quiet = run_cli("-q", "detect", input="just words", cwd=tmpdir)
        assert quiet.returncode == 1
        assert quiet.stdout == ""


def test_body_command():
    """Test body coercion for text and JSON."""
    with tempfile.TemporaryDirectory() as tmpdir:
        result = run_cli("body", input="just a comment", cwd=tmpdir)
        assert result.returncode == 0
        assert json.loads(result.stdout)["content"][0]["content"] == [
            {"type": "text", "text": "just a comment"}
        ]

        doc = {"version": 1, "type": "doc", "content": []}
        result = run_cli("body", input=json.dumps(doc), cwd=tmpdir)
        assert json.loads(result.stdout) == doc


def test_body_command_rejects_bad_json():
    """Test invalid ADF JSON fails with an error message."""
    with tempfile.TemporaryDirectory() as tmpdir:
        result = run_cli("body", input='{"type": "paragraph"}', cwd=tmpdir)
        assert result.returncode == 1
        assert "Error:" in result.stderr


def test_mentions_command():
    """Test listing mentions outside code."""
    text = "Hi @[aa:Ann] and `@[bb:Bob]`\n\n```\n@[cc:Cy]\n```\n\ncc @[dd:Dee]"
    with tempfile.TemporaryDirectory() as tmpdir:
        result = run_cli("mentions", input=text, cwd=tmpdir)
        assert result.returncode == 0
        assert result.stdout.splitlines() == ["aa\t@Ann", "dd\t@Dee"]

        result = run_cli("mentions", "--json", input=text, cwd=tmpdir)
        assert json.loads(result.stdout) == [
            {"id": "aa", "text": "@Ann"},
            {"id": "dd", "text": "@Dee"},
        ]


def test_config_file_is_used():
    """Test md2adf.toml in cwd changes defaults."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "md2adf.toml").write_text("""
[convert]
mentions = false

[output]
indent = 0
""")
        result = run_cli("convert", input="Hi @[abc123:Jane]", cwd=tmpdir)

        assert result.returncode == 0
        assert result.stdout.count("\n") == 1
        leaves = json.loads(result.stdout)["content"][0]["content"]
        assert leaves == [{"type": "text", "text": "Hi @[abc123:Jane]"}]


def test_invalid_config_exits_with_error():
    """Test a broken config is reported, not raised."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = Path(tmpdir) / "bad.toml"
        config.write_text('[logging]\nlevel = "LOUD"\n')

        result = run_cli("--config", str(config), "detect", input="x", cwd=tmpdir)

        assert result.returncode == 1
        assert "logging.level" in result.stderr


def test_missing_input_file(capsys, monkeypatch, tmp_path):
    """Test a missing input file is a clean error."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(["convert", str(tmp_path / "missing.md")])
    assert exc.value.code == 1
    assert "Error:" in capsys.readouterr().err
