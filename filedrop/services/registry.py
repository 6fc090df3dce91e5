# filedrop/services/registry.py
import threading
import uuid
from os import PathLike
from typing import Callable, Dict, List, Optional, Union

PathType = Union[str, PathLike]
KeyFactory = Callable[[], str]

def new_key() -> str:
    """Default key generator: 32 hex chars from a random UUID."""
    return uuid.uuid4().hex

class KeyPathRegistry:
    """
    In-memory key -> path index (resets on restart).

    One lock guards the dict. It is a thread lock because the registry is
    touched both from the event loop and from the worker thread pool; it is
    only ever held for the dict operation itself.
    """

    def __init__(self):
        self._paths: Dict[str, PathType] = {}
        self._lock = threading.Lock()

    def insert(self, key: str, path: PathType) -> None:
        with self._lock:
            self._paths[key] = path

    def lookup(self, key: str) -> Optional[PathType]:
        with self._lock:
            return self._paths.get(key)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._paths)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
