import json
from pathlib import Path

from typer.testing import CliRunner

from wordgen.cli import app

runner = CliRunner()


def test_cli_generate_outputs_response_envelope(tmp_path: Path):
    """generate command prints the JSON envelope with validated candidates."""
    wordlist = _write_wordlist(tmp_path)
    result = runner.invoke(
        app,
        [
            "generate",
            "--characters",
            "cat",
            "--max-length",
            "3",
            "--wordlist",
            f"en={wordlist}",
            "--sort-by",
            "alphabetical",
        ],
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["success"] is True
    words = [item["word"] for item in payload["data"]["combinations"]]
    assert words == sorted(words)
    valid = {item["word"] for item in payload["data"]["combinations"] if item["isValid"]}
    assert valid == {"cat", "act", "tac"}
    assert payload["data"]["totalGenerated"] == 12


def test_cli_generate_rejects_invalid_characters():
    result = runner.invoke(app, ["generate", "--characters", "c4t"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["success"] is False
    assert payload["error"]["code"] == "E001"


def test_cli_generate_reads_config_file(tmp_path: Path):
    wordlist = _write_wordlist(tmp_path)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"max_length: 2\nwordlist_paths:\n  en: {wordlist}\n", encoding="utf-8"
    )
    result = runner.invoke(
        app, ["generate", "--characters", "cat", "--config", str(config_path)]
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert all(item["length"] == 2 for item in payload["data"]["combinations"])
    assert payload["data"]["statistics"]["validWords"] == 0


def test_cli_validate_prints_results(tmp_path: Path):
    wordlist = tmp_path / "fr.txt"
    wordlist.write_text("cafe\tBoisson chaude\n", encoding="utf-8")
    result = runner.invoke(
        app, ["validate", "café", "thé", "--language", "fr", "--wordlist", f"fr={wordlist}"]
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["language"] == "fr"
    first, second = payload["results"]
    assert first["word"] == "cafe"
    assert first["isValid"] is True
    assert first["definition"]["text"] == "Boisson chaude"
    assert second["word"] == "the"
    assert second["isValid"] is False


def test_cli_validate_rejects_unknown_language():
    result = runner.invoke(app, ["validate", "cat", "--language", "xx"])
    assert result.exit_code == 1


def test_cli_print_config():
    """print-config command dumps the current configuration values."""
    result = runner.invoke(app, ["print-config"])
    assert result.exit_code == 0
    assert "max_combinations" in result.stdout
    assert "error_threshold_percentage" in result.stdout


def _write_wordlist(tmp_path: Path) -> Path:
    path = tmp_path / "en.txt"
    path.write_text("# sample\ncat\nact\ntac\n", encoding="utf-8")
    return path
