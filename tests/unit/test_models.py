"""
Unit tests for entity models and identifier helpers.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from class_manager.models.course import Course, DEFAULT_COURSES
from class_manager.models.fee import FeeRecord, PaymentMethod, coerce_amount
from class_manager.models.identifiers import coerce_id, reference_key, same_id
from class_manager.models.student import Student


class TestIdentifiers:
    """Test cases for identifier coercion."""

    @pytest.mark.parametrize("raw", [1697000000000, 1697000000000.0, "1697000000000", " 1697000000000 "])
    def test_coerce_id(self, raw):
        """Test numeric and text ids coerce to the same int."""
        assert coerce_id(raw) == 1697000000000

    @pytest.mark.parametrize("raw", [None, "", "abc", 1.5, True])
    def test_coerce_id_rejects(self, raw):
        """Test non-numeric ids are rejected."""
        with pytest.raises(ValueError):
            coerce_id(raw)

    def test_reference_key(self):
        """Test references normalize to their string form."""
        assert reference_key(1) == "1"
        assert reference_key("1") == "1"
        assert reference_key(None) == ""
        assert reference_key(" legacy-id ") == "legacy-id"

    def test_same_id_across_types(self):
        """Test numeric and text forms match."""
        assert same_id(1697000000000, "1697000000000")
        assert not same_id(1, "2")


class TestPaymentMethod:
    """Test cases for PaymentMethod parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("Cash", PaymentMethod.CASH),
        ("cash", PaymentMethod.CASH),
        ("ONLINE", PaymentMethod.ONLINE),
        (PaymentMethod.ONLINE, PaymentMethod.ONLINE),
    ])
    def test_parse(self, raw, expected):
        """Test tolerant parsing."""
        assert PaymentMethod.parse(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "Card"])
    def test_parse_unknown(self, raw):
        """Test unknown methods parse to None."""
        assert PaymentMethod.parse(raw) is None


class TestCoerceAmount:
    """Test cases for amount coercion."""

    def test_text_amount(self):
        """Test form text is coerced."""
        assert coerce_amount(" 450.5 ") == 450.5

    def test_numeric_amount(self):
        """Test numbers pass through as float."""
        assert coerce_amount(500) == 500.0

    @pytest.mark.parametrize("raw", [None, "", "abc", "nan", float("inf"), False])
    def test_rejects(self, raw):
        """Test unusable amounts raise."""
        with pytest.raises(ValueError):
            coerce_amount(raw)


class TestStudent:
    """Test cases for Student serialization."""

    def test_to_dict_uses_stored_layout(self):
        """Test camelCase keys of the stored layout."""
        student = Student(1697000000000, "Ana", "1", "555-0101", "2023-10-11")

        assert student.to_dict() == {
            "id": 1697000000000,
            "name": "Ana",
            "courseId": "1",
            "phone": "555-0101",
            "joinedDate": "2023-10-11"
        }

    def test_from_dict_tolerates_legacy_values(self):
        """Test string ids and numeric course ids load."""
        student = Student.from_dict({
            "id": "1697000000000",
            "name": "Ana",
            "courseId": 1,
            "phone": "555-0101",
            "joinedDate": "10/11/2023"
        })

        assert student.id == 1697000000000
        assert student.course_id == "1"
        assert student.joined_date == "10/11/2023"

    def test_from_dict_requires_name(self):
        """Test a record without name is rejected."""
        with pytest.raises(ValueError):
            Student.from_dict({"id": 1, "phone": "555-0101"})


class TestCourse:
    """Test cases for Course serialization."""

    def test_default_courses(self):
        """Test the seeded courses."""
        courses = [Course.from_dict(d) for d in DEFAULT_COURSES]

        assert [(c.id, c.name, c.fee) for c in courses] == [
            (1, "Mathematics", 500.0),
            (2, "Science", 450.0),
        ]


class TestFeeRecord:
    """Test cases for FeeRecord serialization."""

    def test_from_dict_coerces_text_amount(self):
        """Test amounts stored as text load as numbers."""
        fee = FeeRecord.from_dict({
            "id": 1697000000001,
            "studentId": "1697000000000",
            "amount": "500",
            "month": "2023-10",
            "method": "Online",
            "date": "10/11/2023"
        })

        assert fee.amount == 500.0
        assert fee.method is PaymentMethod.ONLINE
        assert fee.student_id == "1697000000000"

    def test_missing_method_defaults_to_cash(self):
        """Test a record without a method loads as Cash."""
        fee = FeeRecord.from_dict({"id": 1, "studentId": "1", "amount": 10, "month": "2023-10"})

        assert fee.method is PaymentMethod.CASH

    def test_round_trip(self):
        """Test to_dict output loads back to an equal record."""
        fee = FeeRecord(5, "1", 450.0, "2023-11", PaymentMethod.CASH, "2023-11-02")

        assert FeeRecord.from_dict(fee.to_dict()) == fee

    def test_unknown_method_raises(self):
        """Test an unrecognised method is rejected instead of rewritten."""
        with pytest.raises(ValueError, match="Invalid method"):
            FeeRecord.from_dict({
                "id": 1, "studentId": "1", "amount": 10, "month": "2023-10", "method": "Card"
            })

    def test_bad_amount_raises(self):
        """Test non-numeric stored amount is rejected."""
        with pytest.raises(ValueError):
            FeeRecord.from_dict({"id": 1, "studentId": "1", "amount": "abc", "month": "2023-10"})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
