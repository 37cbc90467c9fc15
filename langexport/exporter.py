"""Export pipeline: discover, resolve, merge and cache definition files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable

from .config import LocalizationConfig, load_config
from .discovery import FileDiscovery
from .events import EventSink
from .export import LocalizationExport
from .loaders import DefinitionLoader, load_definition
from .logging import get_logger
from .merging import MergeStrategy, strategy_for
from .models import DefinitionFile
from .resolver import KeyPathResolver
from .stores import CacheGate, CacheStore, create_store


class LocalizationExporter:
    """Coordinates one export pass for a configured language directory."""

    def __init__(
        self,
        config: LocalizationConfig,
        *,
        store: CacheStore | None = None,
        events: EventSink | None = None,
        loader: DefinitionLoader = load_definition,
        discovery: FileDiscovery | None = None,
    ) -> None:
        self.config = config
        self.store = store or create_store(config.caches.driver, config.caches.path)
        self.gate = CacheGate(self.store, events)
        self.loader = loader
        self.discovery = discovery or FileDiscovery(config.definition_suffixes)
        self.resolver = KeyPathResolver(
            include_folder_path=config.parser.include_folder_path_in_structure,
            format=config.parser.format,
        )
        self.strategy: MergeStrategy = strategy_for(config.parser.format)
        self.logger = get_logger("exporter")

    @classmethod
    def from_path(cls, path: str | Path, **kwargs: Any) -> "LocalizationExporter":
        """Build an exporter from the ``.langexport.yml`` found at ``path``."""
        return cls(load_config(Path(path)), **kwargs)

    def export(self, *, use_cache: bool = True) -> LocalizationExport:
        """Return the merged document, from cache when a live entry exists."""
        if not use_cache:
            document = self.build_document()
            self.gate.announce(document)
            return LocalizationExport(document)

        caches = self.config.caches
        document = self.gate.get_or_compute(caches.key, caches.timeout, self.build_document)
        return LocalizationExport(document, from_cache=self.gate.last_hit)

    def build_document(self) -> Dict[str, Any]:
        """Run discovery and merge without consulting the cache."""
        lang_path = self.config.lang_path
        self.logger.debug("Scanning %s", lang_path)
        found = self.discovery.discover(lang_path)

        document: Dict[str, Any] = {}
        # Vendor first so application files override package translations.
        self._merge_all(document, found.vendor)
        self._merge_all(document, found.application)

        self.logger.info(
            "Exported %d definition files into %d top-level keys",
            len(found),
            len(document),
        )
        return document

    def clear_cache(self) -> bool:
        """Drop the cached document; returns True when an entry was removed."""
        return self.store.forget(self.config.caches.key)

    def _merge_all(self, document: Dict[str, Any], files: Iterable[DefinitionFile]) -> None:
        for definition in files:
            key_path = self.resolver.resolve(definition)
            contents = self.loader(definition.path)
            self.strategy.merge(document, key_path, contents)
            self.logger.debug(
                "Merged %s as %r under %s",
                definition.relative_path,
                key_path.leaf,
                "/".join(key_path.keys),
            )


__all__ = ["LocalizationExporter"]
