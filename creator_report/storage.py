"""
Category-partitioned JSON storage.

Each pipeline stage writes its records to its own namespace directory,
one JSON array per category:

    <root>/creators/founders.json
    <root>/creators-details/founders.json

Files are keyed by the category slug, see core.slug.slugify().
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .core.slug import slugify


class PartitionStore:
    """Reads and writes category partitions under a root directory.

    Attributes:
        root: Directory that holds one subdirectory per namespace
    """

    def __init__(self, root: Path):
        self.root = root

    def namespace_dir(self, namespace: str) -> Path:
        return self.root / namespace

    def save(self, namespace: str, category_label: str, records: Iterable[Any]) -> Path:
        """Write one category's records, replacing any previous file.

        The document is written to a temporary file in the same directory
        and moved into place, so readers never see a partial file.

        Args:
            namespace: Stage namespace (e.g., "creators")
            category_label: Category label or slug; normalized to a slug
            records: Objects with a to_dict() method, or plain dicts

        Returns:
            Path of the written partition file
        """
        directory = self.namespace_dir(namespace)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{slugify(category_label)}.json"
        payload = [_record_to_dict(record) for record in records]

        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            # mkstemp creates the file as 0600; match a plain open() instead.
            os.chmod(tmp_name, 0o666 & ~_current_umask())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return path

    def load_all(self, namespace: str) -> dict[str, list[dict[str, Any]]]:
        """Load every partition of a namespace.

        Args:
            namespace: Stage namespace to read

        Returns:
            Mapping of category slug to its list of raw records, in
            sorted slug order

        Raises:
            FileNotFoundError: If the namespace directory does not exist
            ValueError: If a partition file does not hold a JSON array
        """
        directory = self.namespace_dir(namespace)
        if not directory.is_dir():
            raise FileNotFoundError(f"Partition namespace not found: {directory}")

        partitions: dict[str, list[dict[str, Any]]] = {}
        for path in sorted(directory.glob("*.json")):
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError(f"Partition {path} does not contain a JSON array")
            partitions[path.stem] = data
        return partitions


def _record_to_dict(record: Any) -> dict[str, Any]:
    if isinstance(record, dict):
        return record
    return record.to_dict()


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask
