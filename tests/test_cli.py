from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests
from typer.testing import CliRunner

from cardsmith.typesetting import MATH_STYLESHEET_URL
from cardsmith.ui.cli import DEFAULT_MARKDOWN_EXTENSIONS, app
from cardsmith.ui.cli.state import set_cli_state


runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_cli_state(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CARDSMITH_RENDER_URL", raising=False)
    monkeypatch.delenv("CARDSMITH_RENDER_TIMEOUT", raising=False)
    monkeypatch.delenv("CARDSMITH_MATH_STYLESHEET", raising=False)
    yield
    set_cli_state(verbosity=0, debug=False)


def _write_bundle(tmp_path: Path, cards: int = 2) -> Path:
    bundle = {
        "collection": {"id": 1, "title": "Organic Chemistry", "header_color": "0a0"},
        "flashcards": [
            {"id": index, "front": f"<p>Q{index}</p>", "back": f"<p>A{index}</p>"}
            for index in range(cards)
        ],
    }
    path = tmp_path / "deck.json"
    path.write_text(json.dumps(bundle), encoding="utf-8")
    return path


class _FakeResponse:
    status_code = 200
    ok = True

    def iter_content(self, chunk_size: int = 1):
        yield b"%PDF-1.7"

    def close(self) -> None:
        return


class _FakeSession:
    def __init__(self) -> None:
        self.urls: list[str] = []

    def post(self, url: str, **kwargs):
        self.urls.append(url)
        return _FakeResponse()


def test_default_extensions_are_exposed() -> None:
    assert "pymdownx.superfences" in DEFAULT_MARKDOWN_EXTENSIONS


def test_convert_writes_markup(tmp_path: Path) -> None:
    source = tmp_path / "card.md"
    source.write_text("```box\nRemember\n```\n", encoding="utf-8")
    output = tmp_path / "card.html"

    result = runner.invoke(app, ["convert", str(source), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert '<aside class="flashcard-box"><p>Remember</p></aside>' in output.read_text(
        encoding="utf-8"
    )


def test_tokenize_prints_to_stdout(tmp_path: Path) -> None:
    source = tmp_path / "card.html"
    source.write_text("<p>Energy $E=mc^2$</p>", encoding="utf-8")

    result = runner.invoke(app, ["tokenize", str(source)])

    assert result.exit_code == 0, result.output
    assert 'data-latex="E=mc^2"' in result.output


def test_fonts_lists_catalog() -> None:
    result = runner.invoke(app, ["fonts"])

    assert result.exit_code == 0, result.output
    assert "Roboto" in result.output
    assert "Arial" in result.output


def test_export_dry_run_writes_payload(tmp_path: Path) -> None:
    bundle = _write_bundle(tmp_path, cards=2)
    output = tmp_path / "payload.json"

    result = runner.invoke(
        app, ["export", str(bundle), "--dry-run", "--width", "70", "-o", str(output)]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert len(payload["pages"]) == 4
    assert payload["pageSize"] == [70.0, 51.0]
    assert "#00aa00" in payload["pages"][0]


def test_export_dry_run_uses_configured_math_stylesheet(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CARDSMITH_MATH_STYLESHEET", "https://cdn.example/math.css")
    bundle = _write_bundle(tmp_path, cards=1)
    output = tmp_path / "payload.json"

    result = runner.invoke(app, ["export", str(bundle), "--dry-run", "-o", str(output)])

    assert result.exit_code == 0, result.output
    head = json.loads(output.read_text(encoding="utf-8"))["headHtml"]
    assert 'href="https://cdn.example/math.css"' in head
    assert MATH_STYLESHEET_URL not in head


def test_export_dry_run_can_drop_math_stylesheet(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CARDSMITH_MATH_STYLESHEET", "")
    bundle = _write_bundle(tmp_path, cards=1)
    output = tmp_path / "payload.json"

    result = runner.invoke(app, ["export", str(bundle), "--dry-run", "-o", str(output)])

    assert result.exit_code == 0, result.output
    head = json.loads(output.read_text(encoding="utf-8"))["headHtml"]
    assert MATH_STYLESHEET_URL not in head


def test_export_without_render_url_fails(tmp_path: Path) -> None:
    bundle = _write_bundle(tmp_path)

    result = runner.invoke(app, ["export", str(bundle), "-o", str(tmp_path / "deck.pdf")])

    assert result.exit_code == 1
    assert "not configured" in result.output
    assert not (tmp_path / "deck.pdf").exists()


def test_export_writes_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    session = _FakeSession()
    monkeypatch.setattr(requests, "Session", lambda: session)
    bundle = _write_bundle(tmp_path)
    output = tmp_path / "out" / "deck.pdf"

    result = runner.invoke(
        app,
        ["export", str(bundle), "--render-url", "http://render.local", "-o", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b"%PDF-1.7"
    assert session.urls == ["http://render.local/render"]


def test_export_defaults_to_slugified_filename(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(requests, "Session", lambda: _FakeSession())
    monkeypatch.setenv("CARDSMITH_RENDER_URL", "http://render.local")
    monkeypatch.chdir(tmp_path)
    bundle = _write_bundle(tmp_path)

    result = runner.invoke(app, ["export", str(bundle)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "organic-chemistry-flashcards.pdf").read_bytes() == b"%PDF-1.7"


def test_export_rejects_invalid_bundle(tmp_path: Path) -> None:
    bundle = tmp_path / "broken.yaml"
    bundle.write_text("- just\n- a list\n", encoding="utf-8")

    result = runner.invoke(app, ["export", str(bundle), "--dry-run"])

    assert result.exit_code == 1
    assert "must contain a mapping" in result.output
