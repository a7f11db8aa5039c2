"""
Fee payment validator.

Validates fee input before the repository records it.
"""

from typing import Any, Dict, Iterable, Optional

from ..models.fee import PaymentMethod
from ..models.identifiers import reference_key
from .validators import Validator, ValidationResult


class FeeValidator(Validator):
    """
    Validator for new fee payments.

    Validates:
    - Required fields (student_id, amount, month)
    - Amount is a positive number (text input is accepted)
    - Month format (YYYY-MM)
    - Method is Cash or Online
    - Student reference (warning only)

    Examples:
        >>> validator = FeeValidator(known_student_ids=[1697000000000])
        >>> result = validator.validate({
        ...     "student_id": "1697000000000",
        ...     "amount": "500",
        ...     "month": "2023-10",
        ...     "method": "Cash"
        ... })
        >>> result.is_valid
        True
    """

    def __init__(self, known_student_ids: Optional[Iterable[Any]] = None):
        self._known_student_ids = (
            None if known_student_ids is None
            else {reference_key(s) for s in known_student_ids}
        )

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate fee payment data.

        Args:
            data: Mapping with student_id, amount, month and method

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult()

        result.extend(
            self.validate_required_fields(data, ["student_id", "amount", "month"])
        )
        if not result.is_valid:
            return result

        result.extend([
            self.validate_positive_amount(data["amount"]),
            self.validate_month_format(data["month"]),
        ])

        method = data.get("method")
        if method is not None and PaymentMethod.parse(method) is None:
            allowed = ", ".join(m.value for m in PaymentMethod)
            result.add_error(f"Invalid method: {method} (expected one of: {allowed})")

        student_id = reference_key(data["student_id"])
        if self._known_student_ids is not None and student_id not in self._known_student_ids:
            result.add_warning(f"Unknown student id: {student_id}")

        return result
