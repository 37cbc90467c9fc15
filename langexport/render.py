"""Render exported documents to JavaScript or JSON files."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader

from .export import LocalizationExport
from .logging import get_logger

_TEMPLATES_DIR = Path(__file__).with_name("templates")
_JS_TEMPLATE = "messages.js.j2"
_VARIABLE_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")

_logger = get_logger("render")


def _create_env(templates_dir: Path | None = None) -> Environment:
    directories = [str(templates_dir)] if templates_dir else []
    directories.append(str(_TEMPLATES_DIR))
    loader = FileSystemLoader(directories)
    return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def render_json(document: Mapping[str, Any], *, indent: int | None = 2) -> str:
    return json.dumps(dict(document), indent=indent, ensure_ascii=False, sort_keys=True)


def render_js(
    document: Mapping[str, Any],
    *,
    variable: str = "messages",
    templates_dir: Path | None = None,
) -> str:
    """Return a script assigning ``document`` to the JavaScript ``variable``."""
    if not _VARIABLE_PATTERN.match(variable):
        raise ValueError(f"Invalid JavaScript variable name: {variable!r}")
    payload = json.dumps(dict(document), ensure_ascii=False, sort_keys=True)
    # Keep "</script>" from terminating an inline script tag.
    payload = payload.replace("</", "<\\/")
    template = _create_env(templates_dir).get_template(_JS_TEMPLATE)
    return template.render(variable=variable, payload=payload)


def write_export(
    export: LocalizationExport,
    target: Path,
    *,
    variable: str = "messages",
    flat: bool = False,
) -> Path:
    """Write ``export`` to ``target``; ``.json`` targets get plain JSON."""
    document = export.as_flat() if flat else export.as_nested()
    if target.suffix.lower() == ".json":
        content = render_json(document)
    else:
        content = render_js(document, variable=variable)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content + "\n", encoding="utf-8")
    _logger.info("Wrote %s", target)
    return target


__all__ = ["render_js", "render_json", "write_export"]
