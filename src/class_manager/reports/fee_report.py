"""
Tabular fee reports.

Builds pandas DataFrames from the derived views for console tables
and CSV export.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from ..models.fee import FeeRecord
from ..utils.file_utils import save_csv
from ..views.derived_views import ALL_METHODS, DerivedViews


logger = logging.getLogger(__name__)

FEE_COLUMNS = ["Student", "Month", "Amount", "Method", "Date"]
STUDENT_COLUMNS = ["Name", "Phone", "Course", "Joined"]


def fees_dataframe(views: DerivedViews, fees: Sequence[FeeRecord]) -> pd.DataFrame:
    """
    Build a fee table with student names resolved.

    Args:
        views: Derived views over the repository
        fees: Fee records to include, in display order

    Returns:
        DataFrame with FEE_COLUMNS (empty but typed when there are no fees)
    """
    return pd.DataFrame(views.fee_rows(fees), columns=FEE_COLUMNS)


def students_dataframe(views: DerivedViews) -> pd.DataFrame:
    """Student table with course names resolved."""
    return pd.DataFrame(views.student_rows(), columns=STUDENT_COLUMNS)


def courses_dataframe(views: DerivedViews) -> pd.DataFrame:
    """Course table with enrollment counts."""
    rows = [
        {
            "Course": e.course.name,
            "Fee": e.course.fee,
            "Students": e.student_count,
        }
        for e in views.course_enrollment()
    ]
    return pd.DataFrame(rows, columns=["Course", "Fee", "Students"])


def revenue_by_month(views: DerivedViews) -> pd.DataFrame:
    """
    Total collected per month, sorted by month.

    Returns:
        DataFrame with columns Month and Amount
    """
    df = fees_dataframe(views, views.repository.fees)
    if df.empty:
        return pd.DataFrame(columns=["Month", "Amount"])

    return (
        df.groupby("Month", as_index=False)["Amount"]
        .sum()
        .sort_values("Month")
        .reset_index(drop=True)
    )


def export_fees_csv(
    views: DerivedViews,
    filepath: Path,
    method_filter: str = ALL_METHODS,
    search_text: Optional[str] = "",
    month: Optional[str] = None
) -> bool:
    """
    Write the filtered fee listing to a CSV file.

    Returns:
        True if the file was written, False otherwise
    """
    fees = views.filter_fees(method_filter, search_text, month)
    df = fees_dataframe(views, fees)

    saved = save_csv(df, filepath)
    if saved:
        logger.info(f"Exported {len(df)} fee records to {filepath}")
    return saved
