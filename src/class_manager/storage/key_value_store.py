"""
Durable key-value storage backends.

A store maps a key (e.g. "students") to one text blob.
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from ..utils.file_utils import read_text, write_text


KEY_PATTERN = re.compile(r'[A-Za-z0-9_-]+')


class KeyValueStore(ABC):
    """
    Abstract interface for blob storage.

    Implementations must overwrite the whole value on set() and return
    None from get() for keys that were never written.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the blob stored under ``key``.

        Returns:
            Stored text, or None if the key is absent
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Overwrite the blob stored under ``key``.

        Raises:
            OSError: If the backend cannot persist the value
        """
        pass

    def contains(self, key: str) -> bool:
        """Check whether a blob exists under ``key``."""
        return self.get(key) is not None


class InMemoryStore(KeyValueStore):
    """
    Dict-backed store.

    Used for tests and for throwaway sessions that should not touch disk.

    Examples:
        >>> store = InMemoryStore({"courses": "[]"})
        >>> store.get("courses")
        '[]'
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of everything stored."""
        return dict(self._data)


class JsonFileStore(KeyValueStore):
    """
    Store that keeps each key in its own ``<key>.json`` file.

    Examples:
        >>> store = JsonFileStore("data")
        >>> store.set("fees", "[]")   # writes data/fees.json
    """

    def __init__(self, directory: Union[str, Path]):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        """Directory holding the blob files."""
        return self._directory

    def path_for(self, key: str) -> Path:
        """
        Resolve the file that backs ``key``.

        Raises:
            ValueError: If the key is not a plain identifier
        """
        if not KEY_PATTERN.fullmatch(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        return read_text(self.path_for(key))

    def set(self, key: str, value: str) -> None:
        write_text(self.path_for(key), value)
