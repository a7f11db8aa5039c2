"""
Identifier helpers shared by the entity models.

Records are keyed by integer creation timestamps (milliseconds). References
between records (Student.course_id, FeeRecord.student_id) are kept as free
text, so they are matched through their string form.
"""

from typing import Any


EntityId = int


def coerce_id(raw: Any) -> EntityId:
    """
    Convert a stored identifier to an int.

    Args:
        raw: Identifier as loaded from JSON (int, float, or numeric text)

    Returns:
        Integer identifier

    Raises:
        ValueError: If the value is missing or not numeric
    """
    if raw is None or isinstance(raw, bool):
        raise ValueError(f"Invalid identifier: {raw!r}")

    if isinstance(raw, int):
        return raw

    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"Invalid identifier: {raw!r}")
        return int(raw)

    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        return coerce_id(float(text))


def reference_key(raw: Any) -> str:
    """
    Normalize a reference for comparison.

    ``1``, ``1.0`` and ``" 1 "`` all map to ``"1"``. Non-numeric text is
    returned stripped.

    Examples:
        >>> reference_key(1697000000000)
        '1697000000000'
        >>> reference_key("1697000000000")
        '1697000000000'
    """
    if raw is None:
        return ""
    try:
        return str(coerce_id(raw))
    except ValueError:
        return str(raw).strip()


def same_id(left: Any, right: Any) -> bool:
    """Check whether two identifiers refer to the same record."""
    return reference_key(left) == reference_key(right)
