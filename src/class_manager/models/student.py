"""
Student data model.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .identifiers import EntityId, coerce_id, reference_key


@dataclass(frozen=True)
class Student:
    """
    An enrolled student.

    Attributes:
        id: Creation timestamp in milliseconds
        name: Full name (non-empty)
        course_id: Free-text reference to Course.id
        phone: Contact number
        joined_date: Date the record was created (YYYY-MM-DD)

    Examples:
        >>> student = Student(
        ...     id=1697000000000,
        ...     name="Ana",
        ...     course_id="1",
        ...     phone="0300-1234567",
        ...     joined_date="2023-10-11"
        ... )
        >>> student.to_dict()["courseId"]
        '1'
    """

    id: EntityId
    name: str
    course_id: str
    phone: str
    joined_date: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored JSON layout."""
        return {
            "id": self.id,
            "name": self.name,
            "courseId": self.course_id,
            "phone": self.phone,
            "joinedDate": self.joined_date
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Student':
        """
        Build a student from a stored record.

        Raises:
            ValueError: If id or name is missing
        """
        name = d.get("name")
        if not name:
            raise ValueError("Student record has no name")

        return cls(
            id=coerce_id(d.get("id")),
            name=str(name),
            course_id=reference_key(d.get("courseId")),
            phone=str(d.get("phone") or ""),
            joined_date=str(d.get("joinedDate") or "")
        )
