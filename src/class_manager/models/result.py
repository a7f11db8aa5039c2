"""
Result<T> pattern for repository operations.

Mutations on the entity repository never raise for bad input. They
return a Result that either carries the new record or the list of
validation errors that stopped it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of an operation that may be rejected.

    Attributes:
        status: SUCCESS or FAILURE
        value: The created record on success (None on failure)
        error: Exception behind the failure, if one was raised
        message: Short human-readable description
        errors: Validation errors that caused a failure
        warnings: Non-fatal findings (e.g. a dangling student reference)

    Examples:
        >>> result = repo.add_fee("1697000000000", "500", "2023-10", "Cash")
        >>> if result.is_success:
        ...     print(result.value.amount)
        500.0

        >>> result = repo.add_student("", "1", "")
        >>> result.errors
        ['name must not be empty', 'phone must not be empty']
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(
        cls,
        value: T,
        message: Optional[str] = None,
        warnings: Optional[List[str]] = None
    ) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            value: The created or computed value
            message: Optional success message
            warnings: Non-fatal findings to pass along

        Returns:
            Result instance with SUCCESS status
        """
        return cls(
            status=ResultStatus.SUCCESS,
            value=value,
            message=message,
            warnings=list(warnings or [])
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None,
        errors: Optional[List[str]] = None
    ) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            message: Error message describing the failure
            error: Optional exception that caused the failure
            errors: Individual validation errors

        Returns:
            Result instance with FAILURE status
        """
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            error=error,
            errors=list(errors or [])
        )

    def unwrap(self) -> T:
        """
        Unwrap the result value.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(
                f"Cannot unwrap failure result: {self.message}"
            )
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the value on success, otherwise the default."""
        return self.value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Map a function over the success value.

        Failures pass through untouched. An exception raised by ``func``
        turns into a failure result.

        Examples:
            >>> repo.add_student("Ana", "1", "555-0101").map(lambda s: s.name).value
            'Ana'
        """
        if self.is_failure:
            return Result.failure(self.message, self.error, self.errors)

        try:
            return Result.success(func(self.value), self.message, self.warnings)
        except Exception as e:
            return Result.failure(str(e), e)
