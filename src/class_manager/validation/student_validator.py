"""
Student input validator.
"""

from typing import Any, Dict, Iterable, Optional

from ..models.identifiers import reference_key
from .validators import Validator, ValidationResult


class StudentValidator(Validator):
    """
    Validator for new student input.

    Validates:
    - name and phone are present
    - text lengths
    - course reference (warning only, references are not enforced)

    Examples:
        >>> validator = StudentValidator(known_course_ids=["1", "2"])
        >>> result = validator.validate({"name": "Ana", "phone": "555-0101", "course_id": "1"})
        >>> result.is_valid
        True
    """

    MAX_NAME_LENGTH = 200
    MAX_PHONE_LENGTH = 40

    def __init__(self, known_course_ids: Optional[Iterable[Any]] = None):
        self._known_course_ids = (
            None if known_course_ids is None
            else {reference_key(c) for c in known_course_ids}
        )

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        result.extend(self.validate_required_fields(data, ["name", "phone"]))
        if not result.is_valid:
            return result

        result.extend([
            self.validate_text_length(data["name"], "name", self.MAX_NAME_LENGTH),
            self.validate_text_length(data["phone"], "phone", self.MAX_PHONE_LENGTH),
        ])

        course_id = reference_key(data.get("course_id"))
        if not course_id:
            result.add_warning("Student has no course")
        elif self._known_course_ids is not None and course_id not in self._known_course_ids:
            result.add_warning(f"Unknown course id: {course_id}")

        return result
