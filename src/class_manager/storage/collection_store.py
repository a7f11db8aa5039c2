"""
Persistent store adapter for record collections.

Each collection (students, courses, fees) is saved as one JSON array
under its own key. Saves always rewrite the whole collection.
"""

import copy
import json
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from .key_value_store import KeyValueStore

if TYPE_CHECKING:
    from ..repository.entity_repository import EntityRepository


logger = logging.getLogger(__name__)

STUDENTS_KEY = "students"
COURSES_KEY = "courses"
FEES_KEY = "fees"
COLLECTION_KEYS = (STUDENTS_KEY, COURSES_KEY, FEES_KEY)


class CollectionStore:
    """
    Load and save record collections as JSON arrays.

    Loading never fails: an absent key or a malformed blob yields the
    default (or an empty list). Saving never raises: failures are
    logged and reported through the return value.

    Examples:
        >>> store = CollectionStore(InMemoryStore())
        >>> store.save("fees", [{"id": 1, "amount": 500}])
        True
        >>> store.load("fees")
        [{'id': 1, 'amount': 500}]
        >>> store.load("students")
        []
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        """Underlying key-value backend."""
        return self._store

    def has(self, key: str) -> bool:
        """Check whether a collection has ever been saved under ``key``."""
        return self._read(key) is not None

    def load(
        self,
        key: str,
        default: Optional[List[Dict[str, Any]]] = None
    ) -> List[Dict[str, Any]]:
        """
        Load the collection stored under ``key``.

        Args:
            key: Storage key
            default: Records to return when nothing usable is stored

        Returns:
            Stored records in saved order, or a copy of the default
        """
        raw = self._read(key)
        if raw is None:
            logger.debug(f"No stored collection for '{key}', using default")
            return copy.deepcopy(default) if default is not None else []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed JSON for '{key}', using default: {e}")
            return copy.deepcopy(default) if default is not None else []

        if not isinstance(data, list):
            logger.warning(
                f"Stored '{key}' is {type(data).__name__}, expected list; using default"
            )
            return copy.deepcopy(default) if default is not None else []

        records = [r for r in data if isinstance(r, dict)]
        if len(records) != len(data):
            logger.warning(f"Dropped {len(data) - len(records)} non-object entries from '{key}'")

        logger.debug(f"Loaded {len(records)} records from '{key}'")
        return records

    def save(self, key: str, records: List[Dict[str, Any]]) -> bool:
        """
        Serialize and overwrite the collection stored under ``key``.

        Returns:
            True if the blob was written, False otherwise
        """
        try:
            self._store.set(key, json.dumps(records, ensure_ascii=False))
            logger.debug(f"Saved {len(records)} records to '{key}'")
            return True

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save collection '{key}': {e}", exc_info=True)
            return False

    def save_all(self, collections: Dict[str, List[Dict[str, Any]]]) -> bool:
        """
        Save every collection in ``collections``.

        Returns:
            True only if all saves succeeded
        """
        results = [self.save(key, records) for key, records in collections.items()]
        return all(results)

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._store.get(key)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read collection '{key}': {e}")
            return None


def attach_persistence(
    repository: 'EntityRepository',
    collection_store: CollectionStore
) -> Callable[[], None]:
    """
    Save all three collections after every repository mutation.

    Args:
        repository: Repository to observe
        collection_store: Destination for the serialized collections

    Returns:
        Callable that detaches the persistence listener

    Examples:
        >>> store = CollectionStore(JsonFileStore("data"))
        >>> repo = EntityRepository.load(store)
        >>> detach = attach_persistence(repo, store)
        >>> repo.add_student("Ana", "1", "555-0101")  # writes data/*.json
    """
    def persist(repo: 'EntityRepository') -> None:
        if not collection_store.save_all(repo.snapshot()):
            logger.warning("Repository state was not fully persisted")

    return repository.subscribe(persist)
