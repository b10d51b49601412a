"""Module cache: holds the generated documents and knows when they are stale."""
#
# PURPOSE:
# Keeps the public and private documents between requests and rebuilds them
# only after the registry reports a change.
#
# STALENESS:
# invalidate() bumps a requested generation. A rebuild records the
# generation it started from once both documents are swapped in, so an
# invalidation that lands mid-rebuild leaves the cache stale and the next
# request rebuilds again. Readers keep getting the previous documents until
# the new pair is complete.
#
# SNAPSHOTS:
# Outside production every rebuild also writes openapi.json and
# openapi-private.json for offline inspection. Write failures are logged and
# otherwise ignored.
#

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from schemahub.base.config import SchemaHubConfig, get_config
from schemahub.openapi.merge import Document, SchemaBuilder
from schemahub.registry.events import RegistryEvent, RegistryEventBus, RegistryEventType

logger = logging.getLogger(__name__)

PUBLIC_FILENAME = "openapi.json"
PRIVATE_FILENAME = "openapi-private.json"


def _replace_file(path: Path, text: str) -> None:
    """Write through a temp file in the same directory, then swap it in."""
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        tmp_path.replace(path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def write_snapshot(directory: Path, public: Document, private: Document) -> Tuple[Path, Path]:
    """Write both documents as 4-space indented JSON, replacing old files atomically."""
    directory = Path(directory)
    public_path = directory / PUBLIC_FILENAME
    private_path = directory / PRIVATE_FILENAME
    public_text = json.dumps(public, indent=4)
    private_text = json.dumps(private, indent=4)
    _replace_file(public_path, public_text)
    _replace_file(private_path, private_text)
    return public_path, private_path


class SchemaCache:
    """
    Public/private document cache.

    Args:
        builder: SchemaBuilder producing the documents
        config: settings deciding snapshot behaviour (defaults to global config)
        snapshot_dir: overrides config.docs.snapshot_dir
    """

    def __init__(
        self,
        builder: SchemaBuilder,
        config: Optional[SchemaHubConfig] = None,
        snapshot_dir: Optional[Path] = None,
    ):
        self.builder = builder
        self.config = config or get_config()
        self.snapshot_dir = Path(snapshot_dir) if snapshot_dir is not None else self.config.docs.snapshot_dir

        self._public: Optional[Document] = None
        self._private: Optional[Document] = None
        self._requested_generation: int = 0
        self._built_generation: int = -1
        self._unsubscribe: Optional[Callable[[], None]] = None

    # --- State ---

    @property
    def public(self) -> Optional[Document]:
        return self._public

    @property
    def private(self) -> Optional[Document]:
        return self._private

    @property
    def is_stale(self) -> bool:
        return self._public is None or self._built_generation != self._requested_generation

    @property
    def snapshots_enabled(self) -> bool:
        return not self.config.is_production

    def status(self) -> Dict[str, Any]:
        return {
            "stale": self.is_stale,
            "generation": self._requested_generation,
            "built_generation": self._built_generation,
            "paths": len(self._public.get("paths", {})) if self._public else 0,
            "private_paths": len(self._private.get("paths", {})) if self._private else 0,
        }

    # --- Invalidation ---

    def invalidate(self) -> None:
        """Mark both documents stale. Safe to call at any time."""
        self._requested_generation += 1

    def bind(self, bus: RegistryEventBus) -> None:
        """Invalidate whenever the registry reports a services change."""
        self.unbind()

        def _on_services_changed(event: RegistryEvent) -> None:
            logger.debug(f"Services changed (event #{event.sequence}), invalidating OpenAPI schema")
            self.invalidate()

        self._unsubscribe = bus.subscribe(
            _on_services_changed,
            event_types=[RegistryEventType.SERVICES_CHANGED],
        )

    def unbind(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # --- Regeneration ---

    def regenerate(self) -> Tuple[Document, Document]:
        """
        Build both documents and publish them together.

        Raises:
            SchemaHubError: SCHEMA_COMPILE_FAILED; the previous documents stay published
        """
        generation = self._requested_generation
        logger.info("♻ Regenerate OpenAPI schema...")

        public = self.builder.build(bearer_only=True)
        private = self.builder.build(bearer_only=False)

        self._public, self._private = public, private
        self._built_generation = generation
        return public, private

    async def ensure_fresh(self) -> None:
        """Rebuild if stale, then snapshot outside production."""
        if not self.is_stale:
            return

        public, private = self.regenerate()
        if self.snapshots_enabled:
            await self.snapshot(public, private)

    async def snapshot(self, public: Document, private: Document) -> None:
        try:
            paths = await asyncio.to_thread(write_snapshot, self.snapshot_dir, public, private)
            logger.debug(f"OpenAPI snapshots written: {paths[0]}, {paths[1]}")
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to write OpenAPI snapshot to {self.snapshot_dir}: {e}")

    async def get_public(self) -> Document:
        await self.ensure_fresh()
        return self._public

    async def get_private(self) -> Document:
        await self.ensure_fresh()
        return self._private
