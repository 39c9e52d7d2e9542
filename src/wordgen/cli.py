from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import typer
import yaml

from .config import WordGenConfig, load_config
from .errors import InvalidInputError
from .languages import parse_language
from .service import build_service

app = typer.Typer(help="Random word generator engine CLI.", no_args_is_help=True)


@app.command()
def generate(
    characters: str = typer.Option(..., "--characters", help="Letters to arrange."),
    language: str | None = typer.Option(
        None, "--language", "-l", help="Language code (en, es, fr, de)."
    ),
    min_length: int | None = typer.Option(None, help="Shortest word length to emit."),
    max_length: int | None = typer.Option(None, help="Longest word length to emit."),
    min_complexity: int | None = typer.Option(None, help="Lowest complexity to keep (1-10)."),
    max_complexity: int | None = typer.Option(None, help="Highest complexity to keep (1-10)."),
    sort_by: str | None = typer.Option(
        None, help="Order results by 'length', 'complexity' or 'alphabetical'."
    ),
    sort_order: str | None = typer.Option(None, help="'asc' or 'desc'."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    wordlist: List[str] | None = typer.Option(
        None,
        "--wordlist",
        "-w",
        help="Word list as LANG=PATH (repeatable). Overrides config wordlist_paths.",
    ),
    dictionary: str | None = typer.Option(
        None, "--dictionary", "-d", help="Dictionary provider ('wordlist' or 'oxford')."
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
) -> None:
    """Generate word combinations and print the response envelope as JSON."""
    _setup_logging(log_level)
    cfg = load_config(config)
    _apply_dictionary_overrides(cfg, wordlist, dictionary)
    service = build_service(cfg)

    payload: Dict[str, Any] = {"characters": characters, "language": language}
    if min_length is not None:
        payload["minLength"] = min_length
    if max_length is not None:
        payload["maxLength"] = max_length
    filters = {
        "minComplexity": min_complexity,
        "maxComplexity": max_complexity,
        "sortBy": sort_by,
        "sortOrder": sort_order,
    }
    payload["filters"] = {key: value for key, value in filters.items() if value is not None}

    body = service.handle_payload(payload)
    typer.echo(json.dumps(body, indent=2, ensure_ascii=False))
    if not body["success"]:
        raise typer.Exit(code=1)


@app.command()
def validate(
    words: List[str] = typer.Argument(..., help="Words to check."),
    language: str | None = typer.Option(None, "--language", "-l"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    wordlist: List[str] | None = typer.Option(None, "--wordlist", "-w"),
    dictionary: str | None = typer.Option(None, "--dictionary", "-d"),
    log_level: str = typer.Option("WARNING", "--log-level"),
) -> None:
    """Validate words against the configured dictionary and print JSON results."""
    _setup_logging(log_level)
    cfg = load_config(config)
    _apply_dictionary_overrides(cfg, wordlist, dictionary)
    try:
        lang = parse_language(language or cfg.default_language)
        service = build_service(cfg)
        results = service.validator.validate_batch(words, lang)
    except InvalidInputError as exc:
        typer.echo(json.dumps({"error": exc.details().to_dict()}, indent=2), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(
        json.dumps(
            {"language": lang.value, "results": [r.to_dict() for r in results]},
            indent=2,
            ensure_ascii=False,
        )
    )


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = WordGenConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _setup_logging(level: str) -> None:
    """Send logs to stderr so stdout stays machine-readable."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _apply_dictionary_overrides(
    config: WordGenConfig, wordlist: List[str] | None, dictionary: str | None
) -> None:
    """Apply CLI overrides to dictionary-related config fields when provided."""
    if dictionary:
        config.dictionary_name = dictionary
    if not wordlist:
        return
    paths: Dict[str, str] = {}
    for item in wordlist:
        code, sep, path = item.partition("=")
        if not sep:
            # Bare paths are English word lists.
            code, path = "en", item
        paths[code.strip().lower()] = path.strip()
    config.wordlist_paths = paths


if __name__ == "__main__":
    main()
