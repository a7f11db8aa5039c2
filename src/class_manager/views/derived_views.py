"""
Derived views over the entity repository.

Every method here is a read-only projection that recomputes from the
repository's current state on each call. Nothing is cached.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.course import Course
from ..models.fee import FeeRecord, PaymentMethod
from ..models.identifiers import reference_key
from ..repository.entity_repository import EntityRepository


ALL_METHODS = "all"
DEFAULT_RECENT_FEES = 5


@dataclass(frozen=True)
class CourseEnrollment:
    """A course together with the number of students referencing it."""

    course: Course
    student_count: int


@dataclass
class DashboardSummary:
    """
    Figures shown on the dashboard.

    Attributes:
        total_students: Number of student records
        total_revenue: Sum of all fee amounts
        earnings_overview: (month, amount) chart points, in entry order
    """

    total_students: int
    total_revenue: float
    earnings_overview: List[Tuple[str, float]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_students": self.total_students,
            "total_revenue": self.total_revenue,
            "earnings_overview": [
                {"month": month, "amount": amount}
                for month, amount in self.earnings_overview
            ]
        }


class DerivedViews:
    """
    Read-only projections of repository state.

    Examples:
        >>> views = DerivedViews(repo)
        >>> views.total_revenue()
        950.0
        >>> [f.month for f in views.recent_fees(2)]
        ['2023-10', '2023-11']
        >>> views.filter_fees("Cash", "an")
        [FeeRecord(...)]
    """

    def __init__(self, repository: EntityRepository):
        self._repository = repository

    @property
    def repository(self) -> EntityRepository:
        return self._repository

    def total_revenue(self) -> float:
        """Sum of all fee amounts."""
        return sum((fee.amount for fee in self._repository.fees), 0.0)

    def recent_fees(self, n: int = DEFAULT_RECENT_FEES) -> List[FeeRecord]:
        """
        Last ``n`` fees in insertion order.

        Fees are not sorted by month; the order is the order of entry.
        """
        if n <= 0:
            return []
        return list(self._repository.fees[-n:])

    def filter_fees(
        self,
        method_filter: Any = ALL_METHODS,
        search_text: Optional[str] = "",
        month: Optional[str] = None
    ) -> List[FeeRecord]:
        """
        Filter the fee listing.

        Args:
            method_filter: "all", or a method that must match exactly
            search_text: Case-insensitive substring of the resolved
                student name (dangling references resolve to "Unknown")
            month: Optional exact YYYY-MM match

        Returns:
            Matching fees in insertion order
        """
        if isinstance(method_filter, PaymentMethod):
            method_filter = method_filter.value
        method_filter = method_filter or ALL_METHODS
        needle = (search_text or "").lower()
        month = month.strip() if month else None

        matches = []
        for fee in self._repository.fees:
            if method_filter != ALL_METHODS and fee.method.value != method_filter:
                continue
            if month and fee.month != month:
                continue
            if needle not in self._repository.get_student_name(fee.student_id).lower():
                continue
            matches.append(fee)
        return matches

    def earnings_overview(self, n: int = DEFAULT_RECENT_FEES) -> List[Tuple[str, float]]:
        """Chart points (month, amount) for the last ``n`` fees."""
        return [(fee.month, fee.amount) for fee in self.recent_fees(n)]

    def dashboard_summary(self, recent: int = DEFAULT_RECENT_FEES) -> DashboardSummary:
        return DashboardSummary(
            total_students=len(self._repository.students),
            total_revenue=self.total_revenue(),
            earnings_overview=self.earnings_overview(recent)
        )

    def course_enrollment(self) -> List[CourseEnrollment]:
        """Each course with the number of students enrolled in it."""
        counts: Dict[str, int] = {}
        for student in self._repository.students:
            key = reference_key(student.course_id)
            counts[key] = counts.get(key, 0) + 1

        return [
            CourseEnrollment(course=course, student_count=counts.get(str(course.id), 0))
            for course in self._repository.courses
        ]

    def student_rows(self) -> List[Dict[str, Any]]:
        """Display rows for the student list."""
        return [
            {
                "Name": s.name,
                "Phone": s.phone,
                "Course": self._repository.get_course_name(s.course_id),
                "Joined": s.joined_date,
            }
            for s in self._repository.students
        ]

    def fee_rows(self, fees: Sequence[FeeRecord]) -> List[Dict[str, Any]]:
        """Display rows for a fee listing, with student names resolved."""
        return [
            {
                "Student": self._repository.get_student_name(f.student_id),
                "Month": f.month,
                "Amount": f.amount,
                "Method": f.method.value,
                "Date": f.date,
            }
            for f in fees
        ]
