# filedrop/services/filestore.py
import logging
import os
import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from filedrop.services.registry import KeyFactory, KeyPathRegistry, new_key

logger = logging.getLogger(__name__)

NAMING_POLICIES = ("filename", "key")
# writes in progress; never a key or a stored file name
_PARTIAL_DIR = ".partial"

class FileStoreError(Exception):
    pass

class StorageWriteError(FileStoreError):
    pass

class KeyNotFoundError(FileStoreError):
    pass

class MissingOnDiskError(FileStoreError):
    """The key is registered but its file is gone from disk."""

@dataclass
class StoredFile:
    key: str
    path: Path
    filename: str
    size: int

class FileStore:
    def __init__(
        self,
        base_dir: str,
        registry: KeyPathRegistry,
        key_factory: KeyFactory = new_key,
        naming: str = "filename",
        tamper_probability: float = 0.0,
        tamper_payload: bytes = b"Some additonal data",
        rng: Optional[random.Random] = None,
    ):
        if naming not in NAMING_POLICIES:
            raise ValueError(f"Unknown naming policy: {naming!r}")
        if not 0.0 <= tamper_probability <= 1.0:
            raise ValueError("tamper_probability must be between 0 and 1")
        self.base_dir = Path(base_dir).resolve()
        self.registry = registry
        self.key_factory = key_factory
        self.naming = naming
        self.tamper_probability = tamper_probability
        self.tamper_payload = tamper_payload
        self.rng = rng or random.Random()

    def ensure_dir(self) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _disk_name(self, key: str, filename: Optional[str]) -> str:
        # only the last path component of a client name is honoured
        name = Path(filename).name if filename else ""
        if name in (".", ".."):
            name = ""
        if self.naming == "key":
            return f"{key}{Path(name).suffix}"
        return name or key

    def _disk_path(self, key: str, name: str) -> Path:
        if self.naming == "key":
            return self.base_dir / name
        # one directory per key so equal client names never share a path
        return self.base_dir / key / name

    def _maybe_tamper(self, content: bytes) -> bytes:
        if self.tamper_probability <= 0.0:
            return content
        if self.rng.random() < self.tamper_probability:
            logger.warning("Tampering with upload: appending %d bytes", len(self.tamper_payload))
            return content + self.tamper_payload
        logger.debug("Upload left untouched by tamper hook")
        return content

    def _write(self, key: str, path: Path, content: bytes) -> None:
        tmp = self.base_dir / _PARTIAL_DIR / key
        try:
            tmp.parent.mkdir(exist_ok=True)
            path.parent.mkdir(exist_ok=True)
            with open(tmp, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            try:
                tmp.unlink()
            except FileNotFoundError:
                pass
            raise StorageWriteError(f"Failed to write {path.name}: {e}") from e

    def save(self, content: bytes, filename: Optional[str] = None) -> StoredFile:
        """
        Write bytes to disk and register them under a fresh key.

        The file is fully written (temp file + rename) before the key is
        inserted, so a concurrent lookup never sees a half-written path.
        Nothing is registered if the write fails.
        """
        key = self.key_factory()
        name = self._disk_name(key, filename)
        path = self._disk_path(key, name)

        data = self._maybe_tamper(content)
        self._write(key, path, data)
        self.registry.insert(key, str(path))
        logger.info("Stored %s (%d bytes) as key %s", name, len(data), key)
        return StoredFile(key=key, path=path, filename=name, size=len(data))

    def resolve(self, key: str) -> Path:
        raw = self.registry.lookup(key)
        if raw is None:
            raise KeyNotFoundError(key)
        path = Path(raw)
        if not path.is_file():
            logger.error("Key %s is registered to %s but the file is missing", key, path)
            raise MissingOnDiskError(f"{key} -> {path}")
        return path

    def list_files(self) -> List[str]:
        if not self.base_dir.is_dir():
            return []
        names = []
        for entry in self.base_dir.iterdir():
            if entry.name == _PARTIAL_DIR:
                continue
            if entry.is_dir():
                names.extend(p.name for p in entry.iterdir() if p.is_file())
            elif entry.is_file():
                names.append(entry.name)
        return sorted(names)
