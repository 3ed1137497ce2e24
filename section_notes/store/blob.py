from __future__ import annotations

import json
import os
import re
import uuid
from pathlib import Path
from typing import Any

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """
    Atomic-ish file write:
      - write to temp file in same directory
      - fsync
      - replace() into final path
    Readers never see a half-written blob.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    f = None
    try:
        f = open(tmp_path, "w", encoding=encoding, newline="")
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
        f.close()
        f = None
        tmp_path.replace(path)
    finally:
        if f is not None:
            f.close()
        if tmp_path.exists():
            tmp_path.unlink()


class JsonBlobStore:
    """
    Named store of JSON blobs, one file per key:
        <root>/<store name>/<key>.json
    """

    def __init__(self, root: Path, name: str) -> None:
        if not _KEY_RE.match(name):
            raise ValueError(f"invalid store name: {name!r}")
        self.root = Path(root)
        self.name = name

    @property
    def directory(self) -> Path:
        return self.root / self.name

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"invalid blob key: {key!r}")
        return self.directory / f"{key}.json"

    def get_json(self, key: str) -> Any | None:
        """Stored value, or None when nothing was ever written."""
        path = self._path(key)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def set_json(self, key: str, value: Any) -> None:
        atomic_write_text(self._path(key), json.dumps(value, ensure_ascii=False))

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True
