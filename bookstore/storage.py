# bookstore/storage.py
"""
JSON file persistence for the catalog collections.

Each collection lives in its own file (``books.json``,
``reviews.json``) holding a single-key mapping whose value is the
ordered list of entities::

    {"books": [{"id": "1", ...}, ...]}

Nothing is cached: every call to :meth:`CollectionStore.load` re-reads
the file, so edits made on disk between requests are visible on the
next request. Writers go through :meth:`CollectionStore.mutate`, which
serializes load-modify-save for a collection behind a lock.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

from typing_extensions import Literal

from .errors import StorageError

CollectionName = Literal["books", "reviews"]
COLLECTIONS = ("books", "reviews")

Document = Dict[str, List[Dict[str, Any]]]

logger = logging.getLogger(__name__)


class CollectionStore:
    """Load and save whole collection documents under ``data_dir``."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self._locks = {name: threading.Lock() for name in COLLECTIONS}

    def path_for(self, name: CollectionName) -> Path:
        if name not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {name!r}")
        return self.data_dir / f"{name}.json"

    def initialize(self, name: CollectionName) -> None:
        """Create an empty document for ``name`` if its file is missing."""
        path = self.path_for(name)
        if path.exists():
            return
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.save(name, {name: []})
        logger.info("Created empty %s collection at %s", name, path)

    def load(self, name: CollectionName) -> Document:
        """Read and parse the document for ``name``.

        Raises
        ------
        StorageError
            If the file is missing, unreadable, not JSON, or does not
            hold a list of objects under the collection key.
        """
        path = self.path_for(name)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Could not load %s from %s: %s", name, path, exc)
            raise StorageError(f"Could not read the {name} collection") from exc

        entities = data.get(name) if isinstance(data, dict) else None
        if not isinstance(entities, list) or not all(isinstance(e, dict) for e in entities):
            logger.error("Malformed %s document in %s", name, path)
            raise StorageError(f"The {name} collection is malformed")
        return data

    def save(self, name: CollectionName, document: Document) -> None:
        """Atomically replace the file for ``name`` with ``document``."""
        path = self.path_for(name)
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.error("Could not save %s to %s: %s", name, path, exc)
            raise StorageError(f"Could not write the {name} collection") from exc

    @contextmanager
    def mutate(self, name: CollectionName) -> Iterator[Document]:
        """Hold the collection lock across load, caller edits and save.

        The document is written back only when the ``with`` block exits
        without raising, so a failed operation leaves the file as it was.
        """
        with self._locks[name]:
            document = self.load(name)
            yield document
            self.save(name, document)
