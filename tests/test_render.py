"""Tests for langexport.render."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from langexport.export import LocalizationExport
from langexport.render import render_js, write_export

_DOCUMENT = {"en": {"auth": {"login": "Log in"}}}


def _payload(script: str, variable: str) -> dict:
    line = next(line for line in script.splitlines() if line.startswith(f"{variable} = "))
    return json.loads(line[len(variable) + 3 : -1])


def test_render_js_assigns_document_to_variable() -> None:
    script = render_js(_DOCUMENT, variable="window.messages")

    assert script.startswith("/*")
    assert _payload(script, "window.messages") == _DOCUMENT


def test_render_js_escapes_closing_tags() -> None:
    script = render_js({"en": {"html": {"tag": "</script>"}}})

    assert "</script>" not in script
    assert _payload(script, "messages") == {"en": {"html": {"tag": "</script>"}}}


def test_render_js_rejects_invalid_variable_names() -> None:
    with pytest.raises(ValueError):
        render_js(_DOCUMENT, variable="window messages")


def test_write_export_writes_json_for_json_targets(tmp_path: Path) -> None:
    target = tmp_path / "out" / "messages.json"

    write_export(LocalizationExport(_DOCUMENT), target)

    assert json.loads(target.read_text(encoding="utf-8")) == _DOCUMENT


def test_write_export_can_flatten(tmp_path: Path) -> None:
    target = tmp_path / "messages.js"

    write_export(LocalizationExport(_DOCUMENT), target, variable="Lang", flat=True)

    script = target.read_text(encoding="utf-8")
    assert _payload(script, "Lang") == {"en.auth": {"login": "Log in"}}
