"""
Validation framework with Strategy pattern.

This module provides:
- ValidationResult for errors (fatal) and warnings (informational)
- Validator base class with the field checks shared by the
  student and fee validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from ..models.fee import coerce_amount


MONTH_PATTERN = re.compile(r'([0-9]{4})-([0-9]{2})')


@dataclass
class ValidationResult:
    """
    Result of input validation.

    Attributes:
        is_valid: Whether validation passed
        errors: Problems that block the operation
        warnings: Findings that are reported but tolerated
    """

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """
        Add an error message and mark the result invalid.

        Returns:
            Self for method chaining
        """
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """Add a warning message. Validity is unaffected."""
        self.warnings.append(message)
        return self

    def extend(self, errors: Iterable[Optional[str]]) -> 'ValidationResult':
        """Add every non-empty message in ``errors`` as an error."""
        for error in errors:
            if error:
                self.add_error(error)
        return self

    @property
    def has_errors(self) -> bool:
        """Check if there are errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are warnings."""
        return len(self.warnings) > 0

    def get_summary(self) -> str:
        """
        Get validation summary.

        Returns:
            Human-readable summary of validation results
        """
        if self.is_valid and not self.has_warnings:
            return "Validation passed"

        parts = []

        if self.has_errors:
            parts.append(f"Errors ({len(self.errors)}):")
            parts.extend(f"  - {error}" for error in self.errors)

        if self.has_warnings:
            parts.append(f"Warnings ({len(self.warnings)}):")
            parts.extend(f"  - {warning}" for warning in self.warnings)

        return "\n".join(parts)


class Validator(ABC):
    """
    Abstract base class for input validators.

    Subclasses implement validate() for one kind of form input and
    reuse the field checks below.
    """

    @abstractmethod
    def validate(self, data: dict) -> ValidationResult:
        """
        Validate input data.

        Args:
            data: Raw field values keyed by field name

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: dict,
        required_fields: List[str]
    ) -> List[str]:
        """
        Check that required fields are present and not blank.

        Returns:
            List of error messages for missing fields
        """
        errors = []
        for name in required_fields:
            value = data.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors.append(f"{name} must not be empty")
        return errors

    def validate_text_length(
        self,
        value: Any,
        field_name: str,
        max_length: int
    ) -> Optional[str]:
        """
        Check that a text field fits its maximum length.

        Returns:
            Error message if invalid, None if valid
        """
        if not isinstance(value, str):
            return f"{field_name} must be text, got {type(value).__name__}"

        if len(value.strip()) > max_length:
            return f"{field_name} must be at most {max_length} characters"

        return None

    def validate_month_format(
        self,
        value: Any,
        field_name: str = "month"
    ) -> Optional[str]:
        """
        Check a year-month token (YYYY-MM, month 01..12).

        Returns:
            Error message if invalid, None if valid
        """
        match = MONTH_PATTERN.fullmatch(str(value).strip())
        if not match or not (1 <= int(match.group(2)) <= 12):
            return f"Invalid {field_name} format: {value} (expected YYYY-MM)"
        return None

    def validate_positive_amount(
        self,
        value: Any,
        field_name: str = "amount"
    ) -> Optional[str]:
        """
        Check that a value coerces to a positive finite number.

        Returns:
            Error message if invalid, None if valid
        """
        try:
            amount = coerce_amount(value)
        except ValueError:
            return f"{field_name} must be a number, got {value!r}"

        if amount <= 0:
            return f"{field_name} must be positive, got {value}"

        return None
