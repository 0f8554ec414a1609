import json

import pytest

import main as cli
from auditor.schemas.audit import AuditResult, WordMapping
from shared.errors import ErrorKind, user_message

RESULT = AuditResult(
    feedback="Accurate and natural.",
    word_breakdown=[
        WordMapping(target_word="Buenos días", source_equivalent="Good morning", context="greeting"),
        WordMapping(target_word="amigo", source_equivalent="friend", context="noun, vocative"),
    ],
)


@pytest.fixture
def fake_audit(monkeypatch):
    calls = []
    outcome = {"value": RESULT}

    async def fake(source_text, target_text, target_language, credential=None, **kwargs):
        calls.append({
            "source": source_text,
            "target": target_text,
            "language": target_language,
            "credential": credential,
            "settings": kwargs.get("settings"),
        })
        return outcome["value"]

    monkeypatch.setattr(cli, "load_dotenv", lambda *a, **k: False)
    monkeypatch.setattr(cli, "analyze_translation", fake)
    return calls, outcome


def test_json_output(fake_audit, capsys):
    calls, _ = fake_audit

    code = cli.main(["--source", "Good morning, friend", "--target", "Buenos días, amigo",
                     "--language", "Spanish", "--api-key", "k", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["feedback"] == "Accurate and natural."
    assert payload["wordBreakdown"][0] == {
        "targetWord": "Buenos días", "sourceEquivalent": "Good morning", "context": "greeting",
    }
    assert calls[0]["credential"] == "k"
    assert calls[0]["language"] == "Spanish"


def test_text_report(fake_audit, capsys):
    code = cli.main(["--source", "Good morning", "--target", "Buenos días", "--language", "Spanish"])

    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("FEEDBACK")
    assert "Buenos días  Good morning  greeting" in out


def test_error_string_exits_with_one(fake_audit, capsys):
    _, outcome = fake_audit
    outcome["value"] = user_message(ErrorKind.QUOTA_EXCEEDED)

    code = cli.main(["--source", "a", "--target", "b", "--language", "Spanish"])

    assert code == 1
    assert capsys.readouterr().err.startswith("QUOTA EXCEEDED (429)")


def test_texts_read_from_files(fake_audit, tmp_path):
    calls, _ = fake_audit
    source = tmp_path / "source.txt"
    source.write_text("Hello there", encoding="utf-8")
    target = tmp_path / "target.txt"
    target.write_text("Hola", encoding="utf-8")

    code = cli.main(["--source-file", str(source), "--target-file", str(target), "--language", "Spanish"])

    assert code == 0
    assert calls[0]["source"] == "Hello there"
    assert calls[0]["target"] == "Hola"


def test_missing_file_exits_with_two(fake_audit, tmp_path, capsys):
    calls, _ = fake_audit

    code = cli.main(["--source-file", str(tmp_path / "nope.txt"), "--target", "Hola", "--language", "Spanish"])

    assert code == 2
    assert "[ERROR]" in capsys.readouterr().err
    assert calls == []


def test_directory_as_source_exits_with_two(fake_audit, tmp_path, capsys):
    calls, _ = fake_audit

    code = cli.main(["--source-file", str(tmp_path), "--target", "Hola", "--language", "Spanish"])

    assert code == 2
    assert "not a file" in capsys.readouterr().err
    assert calls == []


def test_undecodable_file_exits_with_two(fake_audit, tmp_path, capsys):
    calls, _ = fake_audit
    target = tmp_path / "target.txt"
    target.write_bytes(b"\xff\xfe\xfa broken")

    code = cli.main(["--source", "Hello", "--target-file", str(target), "--language", "Spanish"])

    assert code == 2
    assert "[ERROR]" in capsys.readouterr().err
    assert calls == []


def test_model_override_reaches_settings(fake_audit):
    calls, _ = fake_audit

    cli.main(["--source", "a", "--target", "b", "--language", "Spanish", "--model", "gemini-custom"])

    assert calls[0]["settings"].model_name == "gemini-custom"
    assert calls[0]["settings"].model_candidates[0] == "gemini-custom"


def test_missing_required_argument_exits_with_two():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--source", "a", "--language", "Spanish"])

    assert excinfo.value.code == 2


def test_report_without_breakdown():
    report = cli.format_report(AuditResult(feedback="Nothing to align.", word_breakdown=[]))

    assert report.endswith("(none)")
