"""
Fee record data models.

This module provides the payment method enum, the fee record itself,
and the amount coercion shared by validation and loading.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .identifiers import EntityId, coerce_id, reference_key


class PaymentMethod(Enum):
    """How a fee was paid."""
    CASH = "Cash"
    ONLINE = "Online"

    @classmethod
    def parse(cls, raw: Any) -> Optional['PaymentMethod']:
        """
        Parse a payment method by value or name, ignoring case.

        Returns:
            Matching member, or None if nothing matches

        Examples:
            >>> PaymentMethod.parse("online")
            <PaymentMethod.ONLINE: 'Online'>
            >>> PaymentMethod.parse("card") is None
            True
        """
        if isinstance(raw, cls):
            return raw
        if raw is None:
            return None

        text = str(raw).strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        return None


def coerce_amount(raw: Any) -> float:
    """
    Convert a fee amount from form or stored input to a float.

    Args:
        raw: Number or numeric text (e.g. "500", " 450.5 ")

    Returns:
        Finite float amount

    Raises:
        ValueError: If the value is missing, non-numeric, or not finite
    """
    if raw is None or isinstance(raw, bool):
        raise ValueError(f"Invalid amount: {raw!r}")

    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            raise ValueError("Invalid amount: empty value")
        value = float(text)

    if not math.isfinite(value):
        raise ValueError(f"Invalid amount: {raw!r}")
    return value


@dataclass(frozen=True)
class FeeRecord:
    """
    A single fee payment.

    Attributes:
        id: Creation timestamp in milliseconds
        student_id: Free-text reference to Student.id
        amount: Amount paid
        month: Month the payment covers (YYYY-MM)
        method: Cash or Online
        date: Date the payment was recorded (YYYY-MM-DD)
    """

    id: EntityId
    student_id: str
    amount: float
    month: str
    method: PaymentMethod
    date: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored JSON layout."""
        return {
            "id": self.id,
            "studentId": self.student_id,
            "amount": self.amount,
            "month": self.month,
            "method": self.method.value,
            "date": self.date
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'FeeRecord':
        """
        Build a fee record from a stored record.

        Amounts stored as text are coerced. A missing method falls back
        to Cash, which was the default choice of the payment form.

        Raises:
            ValueError: If id, amount or method cannot be read
        """
        raw_method = d.get("method")
        method = PaymentMethod.parse(raw_method)
        if method is None:
            if raw_method not in (None, ""):
                raise ValueError(f"Invalid method: {raw_method!r}")
            method = PaymentMethod.CASH

        return cls(
            id=coerce_id(d.get("id")),
            student_id=reference_key(d.get("studentId")),
            amount=coerce_amount(d.get("amount")),
            month=str(d.get("month") or ""),
            method=method,
            date=str(d.get("date") or "")
        )
