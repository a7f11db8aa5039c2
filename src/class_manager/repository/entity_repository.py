"""
In-memory entity repository.

The repository owns the student, course, and fee collections for one
session. It validates input, assigns identifiers, appends records, and
notifies subscribers after each change. It never persists anything
itself; see storage.collection_store.attach_persistence.
"""

import copy
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..models.course import DEFAULT_COURSES, Course
from ..models.fee import FeeRecord, PaymentMethod, coerce_amount
from ..models.identifiers import EntityId, coerce_id, reference_key, same_id
from ..models.result import Result
from ..models.student import Student
from ..storage.collection_store import (
    COURSES_KEY,
    FEES_KEY,
    STUDENTS_KEY,
    CollectionStore,
)
from ..validation.fee_validator import FeeValidator
from ..validation.student_validator import StudentValidator


logger = logging.getLogger(__name__)

UNKNOWN_STUDENT = "Unknown"
UNKNOWN_COURSE = "Unknown"

Listener = Callable[['EntityRepository'], None]
Clock = Callable[[], datetime]
HeldRecord = Tuple[int, Dict[str, Any]]


def _parse_records(
    records: Iterable[Dict[str, Any]],
    factory: Callable[[Dict[str, Any]], Any],
    label: str
) -> Tuple[List[Any], List[HeldRecord]]:
    """
    Build entities from stored dicts.

    Returns:
        Parsed entities, and the records that could not be read together
        with their position in the stored list
    """
    parsed = []
    held = []
    for position, record in enumerate(records):
        try:
            parsed.append(factory(record))
        except (TypeError, ValueError) as e:
            logger.warning(f"Keeping unreadable {label} record {record!r} as stored: {e}")
            held.append((position, record))
    return parsed, held


def _restore_positions(
    records: List[Dict[str, Any]],
    held: List[HeldRecord]
) -> List[Dict[str, Any]]:
    """Put held records back at their original positions."""
    merged = list(records)
    for position, record in held:
        merged.insert(position, copy.deepcopy(record))
    return merged


class EntityRepository:
    """
    Single source of truth for students, courses, and fees.

    Collections are append-only and insertion-ordered. Identifiers are
    creation timestamps in milliseconds, bumped by one when the clock
    has not moved past the last id, so they stay unique and increasing.

    Attributes:
        students: Snapshot of the student collection
        courses: Snapshot of the course collection
        fees: Snapshot of the fee collection

    Examples:
        >>> repo = EntityRepository(courses=[Course(1, "Mathematics", 500)])
        >>> ana = repo.add_student("Ana", "1", "555-0101").unwrap()
        >>> repo.add_fee(ana.id, "500", "2023-10", "Cash").is_success
        True
        >>> repo.get_student_name(ana.id)
        'Ana'
        >>> repo.get_student_name("42")
        'Unknown'
    """

    def __init__(
        self,
        students: Optional[Iterable[Student]] = None,
        courses: Optional[Iterable[Course]] = None,
        fees: Optional[Iterable[FeeRecord]] = None,
        clock: Optional[Clock] = None,
        held: Optional[Dict[str, List[HeldRecord]]] = None
    ):
        self._students: List[Student] = list(students or [])
        self._courses: List[Course] = list(courses or [])
        self._fees: List[FeeRecord] = list(fees or [])
        self._clock: Clock = clock or datetime.now
        self._listeners: List[Listener] = []
        self._held: Dict[str, List[HeldRecord]] = dict(held or {})

    @classmethod
    def load(
        cls,
        collection_store: CollectionStore,
        clock: Optional[Clock] = None
    ) -> 'EntityRepository':
        """
        Build a repository from stored collections.

        Default courses are seeded only when no course collection has
        been stored yet (or the stored one is unreadable).

        Records that cannot be read are left out of the collections but
        kept as stored, so later saves write them back unchanged.
        """
        students, held_students = _parse_records(
            collection_store.load(STUDENTS_KEY), Student.from_dict, "student"
        )
        courses, held_courses = _parse_records(
            collection_store.load(COURSES_KEY, DEFAULT_COURSES), Course.from_dict, "course"
        )
        fees, held_fees = _parse_records(
            collection_store.load(FEES_KEY), FeeRecord.from_dict, "fee"
        )

        logger.info(
            f"Loaded {len(students)} students, {len(courses)} courses, "
            f"{len(fees)} fees"
        )
        return cls(
            students=students,
            courses=courses,
            fees=fees,
            clock=clock,
            held={
                STUDENTS_KEY: held_students,
                COURSES_KEY: held_courses,
                FEES_KEY: held_fees,
            }
        )

    @property
    def students(self) -> Tuple[Student, ...]:
        return tuple(self._students)

    @property
    def courses(self) -> Tuple[Course, ...]:
        return tuple(self._courses)

    @property
    def fees(self) -> Tuple[FeeRecord, ...]:
        return tuple(self._fees)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every successful mutation.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add_student(
        self,
        name: Optional[str],
        course_id: Any,
        phone: Optional[str]
    ) -> Result[Student]:
        """
        Validate and append a new student.

        Args:
            name: Full name (required)
            course_id: Reference to a course id (not enforced)
            phone: Phone number (required)

        Returns:
            Result with the new Student, or the validation errors
        """
        validator = StudentValidator(known_course_ids=[c.id for c in self._courses])
        validation = validator.validate(
            {"name": name, "course_id": course_id, "phone": phone}
        )
        if not validation.is_valid:
            logger.info(f"Rejected student: {'; '.join(validation.errors)}")
            return Result.failure("Invalid student", errors=validation.errors)

        now = self._clock()
        student = Student(
            id=self._next_id(STUDENTS_KEY, self._students, now),
            name=name.strip(),
            course_id=reference_key(course_id),
            phone=phone.strip(),
            joined_date=now.date().isoformat()
        )
        self._students.append(student)

        for warning in validation.warnings:
            logger.warning(f"Student {student.id}: {warning}")
        logger.info(f"Added student {student.id}")
        logger.debug(f"Student {student.id}: course={student.course_id}, phone={student.phone}")

        self._notify()
        return Result.success(student, "Student added", validation.warnings)

    def add_fee(
        self,
        student_id: Any,
        amount: Any,
        month: Optional[str],
        method: Any = PaymentMethod.CASH
    ) -> Result[FeeRecord]:
        """
        Validate and append a fee payment.

        Args:
            student_id: Reference to a student id (not enforced)
            amount: Amount as a number or numeric text
            month: Month covered, YYYY-MM
            method: "Cash" or "Online" (case-insensitive), or a PaymentMethod

        Returns:
            Result with the new FeeRecord, or the validation errors
        """
        validator = FeeValidator(known_student_ids=[s.id for s in self._students])
        validation = validator.validate({
            "student_id": student_id,
            "amount": amount,
            "month": month,
            "method": method,
        })
        if not validation.is_valid:
            logger.info(f"Rejected fee: {'; '.join(validation.errors)}")
            return Result.failure("Invalid fee", errors=validation.errors)

        now = self._clock()
        fee = FeeRecord(
            id=self._next_id(FEES_KEY, self._fees, now),
            student_id=reference_key(student_id),
            amount=coerce_amount(amount),
            month=month.strip(),
            method=PaymentMethod.parse(method) or PaymentMethod.CASH,
            date=now.date().isoformat()
        )
        self._fees.append(fee)

        for warning in validation.warnings:
            logger.warning(f"Fee {fee.id}: {warning}")
        logger.info(f"Recorded fee {fee.id} ({fee.method.value}, {fee.month})")

        self._notify()
        return Result.success(fee, "Fee recorded", validation.warnings)

    def find_student(self, student_id: Any) -> Optional[Student]:
        """
        Look up a student by id.

        Ids are compared by their string form, so 1697000000000 and
        "1697000000000" match the same student.

        Returns:
            The student, or None for a dangling reference
        """
        for student in self._students:
            if same_id(student.id, student_id):
                return student
        return None

    def get_student_name(self, student_id: Any) -> str:
        """Return the student's name, or "Unknown" if no student matches."""
        student = self.find_student(student_id)
        return student.name if student else UNKNOWN_STUDENT

    def find_course(self, course_id: Any) -> Optional[Course]:
        """Look up a course by id. Returns None if nothing matches."""
        for course in self._courses:
            if same_id(course.id, course_id):
                return course
        return None

    def get_course_name(self, course_id: Any) -> str:
        """Return the course name, or "Unknown" if no course matches."""
        course = self.find_course(course_id)
        return course.name if course else UNKNOWN_COURSE

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Serialize all collections in their stored layout.

        Unreadable records kept from loading are written back at their
        original positions.

        Returns:
            Mapping of storage key to list of record dicts
        """
        return {
            STUDENTS_KEY: self._with_held(STUDENTS_KEY, self._students),
            COURSES_KEY: self._with_held(COURSES_KEY, self._courses),
            FEES_KEY: self._with_held(FEES_KEY, self._fees),
        }

    @property
    def held_records(self) -> Dict[str, List[Dict[str, Any]]]:
        """Stored records that could not be read, per storage key."""
        return {
            key: [copy.deepcopy(record) for _, record in held]
            for key, held in self._held.items()
            if held
        }

    def _with_held(self, key: str, items: List[Any]) -> List[Dict[str, Any]]:
        return _restore_positions([item.to_dict() for item in items], self._held.get(key, []))

    def _next_id(self, key: str, collection: List[Any], now: datetime) -> EntityId:
        ids = [item.id for item in collection]
        for _, record in self._held.get(key, []):
            try:
                ids.append(coerce_id(record.get("id")))
            except ValueError:
                continue

        candidate = int(now.timestamp() * 1000)
        if ids and candidate <= max(ids):
            candidate = max(ids) + 1
        return candidate

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
