import io
import json

from promptlint.cli import main
from promptlint.http import HttpResponse

LEGACY_CONTENT = json.dumps(
    [
        {
            "name": "token-length",
            "description": "short words",
            "reason": "...",
            "fix": "...",
            "originalSnippet": "",
            "fixedSnippet": "",
        }
    ]
)


def _fake_post(body):
    calls = []

    def fake_post_json(url, payload, headers=None, timeout=300):
        calls.append(payload)
        return HttpResponse(status=200, body=json.dumps(body))

    return fake_post_json, calls


def test_prompt_from_stdin_renders_report(monkeypatch, capsys):
    fake, calls = _fake_post({"choices": [{"message": {"content": LEGACY_CONTENT}}]})
    monkeypatch.setattr("promptlint.validator.post_json", fake)
    monkeypatch.setenv("PROMPTLINT_API_KEY", "sk-test")
    monkeypatch.setattr("sys.stdin", io.StringIO("This is a test prompt"))

    exit_code = main(["--no-color"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert len(calls) == 1
    assert captured.out == "Found 1 issues:\n\n[Issue 1] short words\nReason: ...\nFix: ...\n"
    assert "[promptlint] Finished" in captured.err


def test_prompt_from_file_with_no_issues(monkeypatch, capsys, tmp_path):
    arguments = json.dumps({"issues": []})
    fake, _ = _fake_post({"choices": [{"message": {"tool_calls": [{"function": {"arguments": arguments}}]}}]})
    monkeypatch.setattr("promptlint.validator.post_json", fake)
    monkeypatch.setenv("PROMPTLINT_API_KEY", "sk-test")
    prompt = tmp_path / "prompt.txt"
    prompt.write_text("You are a chef. List three soups.", encoding="utf-8")

    exit_code = main(["--file", str(prompt), "--no-color", "--quiet"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out == "No issues found!\n"
    assert captured.err == ""


def test_missing_api_key_fails(monkeypatch, capsys):
    monkeypatch.delenv("PROMPTLINT_API_KEY", raising=False)
    monkeypatch.setattr("sys.stdin", io.StringIO("prompt"))

    exit_code = main(["--no-color", "--quiet"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "PROMPTLINT_API_KEY" in captured.err


def test_malformed_tool_arguments_abort_without_report(monkeypatch, capsys):
    fake, _ = _fake_post({"choices": [{"message": {"tool_calls": [{"function": {"arguments": "{oops"}}]}}]})
    monkeypatch.setattr("promptlint.validator.post_json", fake)
    monkeypatch.setenv("PROMPTLINT_API_KEY", "sk-test")
    monkeypatch.setattr("sys.stdin", io.StringIO("prompt"))

    exit_code = main(["--no-color", "--quiet"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert captured.err.startswith("Error checking prompt with LLM API:")


def test_blank_input_is_rejected(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("   \n"))

    exit_code = main(["--quiet"])

    assert exit_code == 1
    assert "Empty input" in capsys.readouterr().err


def test_missing_rules_file_fails(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr("sys.stdin", io.StringIO("prompt"))

    exit_code = main(["--rules", str(tmp_path / "nope.yaml"), "--quiet"])

    assert exit_code == 1
    assert "failed to load rules" in capsys.readouterr().err


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out == "promptlint version 0.1.0\n"


def test_endpoint_without_scheme_fails_cleanly(monkeypatch, capsys):
    monkeypatch.setenv("PROMPTLINT_API_KEY", "sk-test")
    monkeypatch.setenv("PROMPTLINT_API_ENDPOINT", "api.example.com/v1/chat/completions")
    monkeypatch.setattr("sys.stdin", io.StringIO("prompt"))

    exit_code = main(["--no-color", "--quiet"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert captured.err.startswith("Error checking prompt with LLM API: Invalid API endpoint")
