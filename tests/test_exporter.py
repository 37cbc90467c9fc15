"""Tests for langexport.exporter."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest

from langexport.errors import (
    DirectoryNotFoundError,
    FileLoadError,
    InvalidPathError,
)
from langexport.events import EventDispatcher, ExportCompletedEvent
from langexport.exporter import LocalizationExporter
from langexport.stores import MemoryCacheStore
from tests._fixtures.lang_builder import LangBuilder


class RecordingStore(MemoryCacheStore):
    def __init__(self) -> None:
        super().__init__()
        self.puts: List[Tuple[str, Any, Optional[int]]] = []

    def put(self, key: str, value: Any, ttl: Optional[int]) -> None:
        self.puts.append((key, value, ttl))
        super().put(key, value, ttl)


def _listener() -> Tuple[EventDispatcher, List[ExportCompletedEvent]]:
    events: List[ExportCompletedEvent] = []
    dispatcher = EventDispatcher()
    dispatcher.subscribe(events.append)
    return dispatcher, events


def test_application_file_overrides_vendor_file(lang_builder: LangBuilder) -> None:
    lang_builder.write(
        {
            "en/auth.json": {"login": "Log in"},
            "vendor/acme/en/auth.json": {"login": "Sign in", "logout": "Bye"},
        }
    )

    result = lang_builder.exporter().export()

    assert result.as_nested()["en"]["auth"] == {"login": "Log in", "logout": "Bye"}


def test_vendor_file_inside_language_directory_merges_first(lang_builder: LangBuilder) -> None:
    lang_builder.write(
        {
            "en/auth.json": {"login": "Log in"},
            "en/vendor/acme/auth.json": {"login": "Sign in", "logout": "Bye"},
        }
    )

    result = lang_builder.exporter().export()

    assert result.to_dict() == {"en": {"auth": {"login": "Log in", "logout": "Bye"}}}


def test_disjoint_files_keep_every_key(lang_builder: LangBuilder) -> None:
    lang_builder.write(
        {
            "en/auth.json": {"login": "Log in"},
            "en/menu.yaml": "home: Home\nabout: About\n",
            "de/auth.json": {"login": "Anmelden"},
            "vendor/acme/de/billing.yml": "invoice: Rechnung\n",
        }
    )

    result = lang_builder.exporter().export()

    assert result.to_dict() == {
        "en": {"auth": {"login": "Log in"}, "menu": {"home": "Home", "about": "About"}},
        "de": {"auth": {"login": "Anmelden"}, "billing": {"invoice": "Rechnung"}},
    }


def test_same_namespace_from_subfolder_merges_in_path_order(lang_builder: LangBuilder) -> None:
    lang_builder.write(
        {
            "en/admin/auth.json": {"login": "Admin login", "sudo": "Elevate"},
            "en/auth.json": {"login": "Log in"},
        }
    )

    result = lang_builder.exporter().export()

    # en/admin/auth.json sorts before en/auth.json, so the latter wins.
    assert result.as_nested()["en"]["auth"] == {"login": "Log in", "sudo": "Elevate"}


def test_folder_path_in_structure(lang_builder: LangBuilder) -> None:
    lang_builder.configure(
        """
        parser:
          include_folder_path_in_structure: true
        """
    )
    lang_builder.write({"en/forms/contact.json": {"name": "Name"}})

    result = lang_builder.exporter().export()

    assert result.as_nested()["en"]["forms"]["contact"] == {"name": "Name"}


def test_lang_js_format_uses_dotted_top_level_keys(lang_builder: LangBuilder) -> None:
    lang_builder.configure(
        """
        parser:
          include_folder_path_in_structure: true
          format: lang.js
        """
    )
    lang_builder.write(
        {
            "en/forms/contact.json": {"name": "Name"},
            "en/auth.json": {"login": "Log in"},
        }
    )

    result = lang_builder.exporter().export()

    assert result.to_dict() == {
        "en.forms.contact": {"name": "Name"},
        "en.auth": {"login": "Log in"},
    }


def test_fresh_export_emits_event_and_caches(lang_builder: LangBuilder) -> None:
    lang_builder.configure(
        """
        caches:
          key: app.strings
          timeout: 60
        """
    )
    lang_builder.write({"en/auth.json": {"login": "Log in"}})
    store = RecordingStore()
    dispatcher, events = _listener()
    exporter = lang_builder.exporter(store=store, events=dispatcher)

    first = exporter.export()
    second = exporter.export()

    assert first.from_cache is False
    assert second.from_cache is True
    assert second == first
    assert len(events) == 1
    assert events[0].document == {"en": {"auth": {"login": "Log in"}}}
    assert [(key, ttl) for key, _, ttl in store.puts] == [("app.strings", 60)]


def test_zero_timeout_recomputes_every_time(lang_builder: LangBuilder) -> None:
    lang_builder.configure("caches:\n  timeout: 0\n")
    lang_builder.write({"en/auth.json": {"login": "Log in"}})
    store = RecordingStore()
    dispatcher, events = _listener()
    exporter = lang_builder.exporter(store=store, events=dispatcher)

    exporter.export()
    lang_builder.write({"en/auth.json": {"login": "Sign in"}})
    result = exporter.export()

    assert result.as_nested()["en"]["auth"] == {"login": "Sign in"}
    assert len(events) == 2
    assert store.puts == []


def test_cached_document_is_served_without_scanning(lang_builder: LangBuilder) -> None:
    store = MemoryCacheStore()
    store.put("localization.array", {"en": {"auth": {"login": "cached"}}}, 60)
    lang_builder.lang.rmdir()
    dispatcher, events = _listener()

    result = lang_builder.exporter(store=store, events=dispatcher).export()

    assert result.from_cache is True
    assert result.as_nested()["en"]["auth"] == {"login": "cached"}
    assert events == []


def test_use_cache_false_bypasses_store(lang_builder: LangBuilder) -> None:
    store = MemoryCacheStore()
    store.put("localization.array", {"stale": {}}, 60)
    lang_builder.write({"en/auth.json": {"login": "Log in"}})

    dispatcher, events = _listener()

    result = lang_builder.exporter(store=store, events=dispatcher).export(use_cache=False)

    assert result.to_dict() == {"en": {"auth": {"login": "Log in"}}}
    assert store.get("localization.array") == {"stale": {}}
    assert len(events) == 1


def test_clear_cache_forgets_configured_key(lang_builder: LangBuilder) -> None:
    lang_builder.write({"en/auth.json": {"login": "Log in"}})
    exporter = lang_builder.exporter()
    exporter.export()

    assert exporter.clear_cache() is True
    assert exporter.clear_cache() is False


def test_missing_lang_directory_aborts(lang_builder: LangBuilder) -> None:
    lang_builder.lang.rmdir()

    with pytest.raises(DirectoryNotFoundError):
        lang_builder.exporter().export()


def test_broken_file_aborts_without_partial_result(lang_builder: LangBuilder) -> None:
    lang_builder.write(
        {
            "en/auth.json": {"login": "Log in"},
            "en/menu.json": '{"home": ',
        }
    )
    store = RecordingStore()
    dispatcher, events = _listener()

    with pytest.raises(FileLoadError):
        lang_builder.exporter(store=store, events=dispatcher).export()

    assert events == []
    assert store.puts == []


def test_file_outside_language_directory_aborts(lang_builder: LangBuilder) -> None:
    lang_builder.write({"en.json": {"login": "Log in"}})

    with pytest.raises(InvalidPathError):
        lang_builder.exporter().export()


def test_default_file_store_persists_between_exporters(lang_builder: LangBuilder) -> None:
    lang_builder.write({"en/auth.json": {"login": "Log in"}})

    LocalizationExporter.from_path(lang_builder.root).export()
    result = LocalizationExporter.from_path(lang_builder.root).export()

    assert result.from_cache is True
    assert (lang_builder.root / ".langexport" / "cache.json").exists()


def test_yaml_typed_values_survive_the_file_cache(lang_builder: LangBuilder) -> None:
    lang_builder.write(
        {
            "en/news.yaml": "released: 2024-01-01\ntitle: Launch\n",
            "en/errors.yaml": "404: Not found\n500: Server error\n",
        }
    )

    fresh = LocalizationExporter.from_path(lang_builder.root).export()
    cached = LocalizationExporter.from_path(lang_builder.root).export()

    assert fresh.from_cache is False
    assert cached.from_cache is True
    assert cached == fresh
    assert cached.to_dict()["en"] == {
        "news": {"released": "2024-01-01", "title": "Launch"},
        "errors": {"404": "Not found", "500": "Server error"},
    }


@pytest.mark.parametrize("use_cache", [True, False])
def test_event_handlers_cannot_change_the_result(
    lang_builder: LangBuilder, use_cache: bool
) -> None:
    lang_builder.write({"en/auth.json": {"login": "Log in"}})
    dispatcher = EventDispatcher()

    @dispatcher.subscribe
    def _rewrite(event: ExportCompletedEvent) -> None:
        event.document["en"]["auth"]["login"] = "changed"

    result = lang_builder.exporter(events=dispatcher).export(use_cache=use_cache)

    assert result.to_dict() == {"en": {"auth": {"login": "Log in"}}}
