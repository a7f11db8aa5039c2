"""
Course data model and the courses seeded on first run.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from .identifiers import EntityId, coerce_id


@dataclass(frozen=True)
class Course:
    """
    A course offered by the class.

    Attributes:
        id: Course identifier
        name: Display name
        fee: Monthly fee as a plain number
    """

    id: EntityId
    name: str
    fee: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored JSON layout."""
        return {
            "id": self.id,
            "name": self.name,
            "fee": self.fee
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Course':
        """
        Build a course from a stored record.

        Raises:
            ValueError: If id or fee cannot be read as numbers
        """
        return cls(
            id=coerce_id(d.get("id")),
            name=str(d.get("name") or ""),
            fee=float(d.get("fee") or 0)
        )


DEFAULT_COURSES: List[Dict[str, Any]] = [
    {"id": 1, "name": "Mathematics", "fee": 500},
    {"id": 2, "name": "Science", "fee": 450},
]
