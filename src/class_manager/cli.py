"""
ClassManager console front-end.

Usage:
    class-manager dashboard
    class-manager students
    class-manager courses
    class-manager fees [--method Cash|Online] [--search TEXT] [--month YYYY-MM]
    class-manager add-student --name NAME --phone PHONE [--course ID]
    class-manager add-fee --student ID --amount AMOUNT --month YYYY-MM [--method Cash|Online]
    class-manager export-fees [--output FILE] [--method ...] [--search ...] [--month ...]

Examples:
    # Enroll a student in course 1 (Mathematics)
    class-manager add-student --name "Ana" --phone "0300-1234567" --course 1

    # Record an online payment for October 2023
    class-manager add-fee --student 1697000000000 --amount 500 --month 2023-10 --method Online

    # Cash payments by students whose name contains "an"
    class-manager fees --method Cash --search an

    # Keep data somewhere else for one run
    class-manager --data-dir /tmp/classes dashboard
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .models.fee import PaymentMethod
from .models.result import Result
from .navigation import View, ViewSelector
from .repository.entity_repository import EntityRepository
from .reports.fee_report import (
    courses_dataframe,
    export_fees_csv,
    fees_dataframe,
    revenue_by_month,
    students_dataframe,
)
from .storage.collection_store import CollectionStore, attach_persistence
from .storage.key_value_store import InMemoryStore, JsonFileStore
from .utils.config import VALID_LOG_LEVELS, config
from .utils.file_utils import generate_filename
from .utils.logger import setup_logger
from .views.derived_views import ALL_METHODS, DerivedViews


logger = logging.getLogger(__name__)

METHOD_CHOICES = [ALL_METHODS] + [m.value for m in PaymentMethod]


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="class-manager",
        description="Track students, courses and fee payments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--data-dir",
        help="Storage directory (overrides CLASS_MANAGER_DATA_DIR)"
    )
    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        help="Logging level (overrides LOG_LEVEL)"
    )
    parser.add_argument(
        "--ephemeral",
        action="store_true",
        help="Keep data in memory only; nothing is read from or written to disk"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("dashboard", help="Show totals and recent earnings")
    subparsers.add_parser("students", help="List students")
    subparsers.add_parser("courses", help="List courses")

    fees = subparsers.add_parser("fees", help="List fee records")
    _add_fee_filters(fees)

    add_student = subparsers.add_parser("add-student", help="Add a student")
    add_student.add_argument("--name", required=True, help="Full name")
    add_student.add_argument("--phone", required=True, help="Phone number")
    add_student.add_argument("--course", default="", help="Course id")

    add_fee = subparsers.add_parser("add-fee", help="Record a fee payment")
    add_fee.add_argument("--student", required=True, help="Student id")
    add_fee.add_argument("--amount", required=True, help="Amount paid")
    add_fee.add_argument("--month", required=True, help="Month covered (YYYY-MM)")
    add_fee.add_argument(
        "--method",
        default=PaymentMethod.CASH.value,
        help="Cash or Online (default: Cash)"
    )

    export = subparsers.add_parser("export-fees", help="Export fee records to CSV")
    export.add_argument("--output", help="CSV path (default: timestamped file in output dir)")
    _add_fee_filters(export)

    return parser.parse_args(argv)


def _add_fee_filters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--method",
        choices=METHOD_CHOICES,
        default=ALL_METHODS,
        help="Payment method filter (default: all)"
    )
    parser.add_argument("--search", default="", help="Student name contains")
    parser.add_argument("--month", help="Exact month (YYYY-MM)")


def open_repository(data_dir: Path, ephemeral: bool = False) -> EntityRepository:
    """
    Load the repository from ``data_dir`` and persist every change back.

    With ``ephemeral`` the collections live in memory for this run only.

    Returns:
        Repository with persistence attached
    """
    backend = InMemoryStore() if ephemeral else JsonFileStore(data_dir)
    store = CollectionStore(backend)
    repository = EntityRepository.load(store)
    attach_persistence(repository, store)
    return repository


def render_dashboard(views: DerivedViews, recent: int) -> None:
    summary = views.dashboard_summary(recent)

    print("\n" + "=" * 60)
    print("DASHBOARD")
    print("=" * 60)
    print(f"Total students:           {summary.total_students}")
    print(f"Revenue collected:        {summary.total_revenue:.2f}")
    print("=" * 60)

    print("\nEarnings overview (latest entries):")
    print("-" * 60)
    if not summary.earnings_overview:
        print("No fees recorded yet.")
    for month, amount in summary.earnings_overview:
        print(f"{month:10s} | {amount:10.2f}")
    print("-" * 60)

    monthly = revenue_by_month(views)
    if not monthly.empty:
        print("\nRevenue by month:")
        print(monthly.to_string(index=False))


def render_table(title: str, df: pd.DataFrame, empty_message: str) -> None:
    print(f"\n{title}")
    print("-" * 60)
    if df.empty:
        print(empty_message)
    else:
        print(df.to_string(index=False))
    print("-" * 60)


def render_view(view: View, views: DerivedViews, args: argparse.Namespace) -> None:
    """Print the selected view."""
    if view == View.DASHBOARD:
        render_dashboard(views, config.recent_fees)
    elif view == View.STUDENTS:
        render_table("STUDENTS", students_dataframe(views), "No students yet.")
    elif view == View.COURSES:
        render_table("COURSES", courses_dataframe(views), "No courses.")
    elif view == View.FEES:
        fees = views.filter_fees(args.method, args.search, args.month)
        render_table("FEE RECORDS", fees_dataframe(views, fees), "No matching fees.")


def report_result(result: Result, label: str) -> int:
    """
    Print the outcome of a mutation.

    Returns:
        Exit status (0 on success, 1 on failure)
    """
    if result.is_failure:
        print(f"{label} not saved:")
        for error in result.errors:
            print(f"  - {error}")
        return 1

    print(f"{label} saved (id: {result.value.id})")
    for warning in result.warnings:
        print(f"  ! {warning}")
    return 0


def run(args: argparse.Namespace) -> int:
    """
    Execute the parsed command.

    Returns:
        Exit status
    """
    data_dir = Path(args.data_dir) if args.data_dir else config.data_dir
    repository = open_repository(data_dir, ephemeral=args.ephemeral)
    views = DerivedViews(repository)

    if args.command == "add-student":
        return report_result(
            repository.add_student(args.name, args.course, args.phone),
            "Student"
        )

    if args.command == "add-fee":
        return report_result(
            repository.add_fee(args.student, args.amount, args.month, args.method),
            "Fee"
        )

    if args.command == "export-fees":
        output = (
            Path(args.output) if args.output
            else config.output_dir / generate_filename("fees", "csv")
        )
        if not export_fees_csv(views, output, args.method, args.search, args.month):
            print(f"Export failed: {output}")
            return 1
        print(f"Exported to {output}")
        return 0

    selector = ViewSelector()
    render_view(selector.select(args.command), views, args)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the class-manager command."""
    args = parse_arguments(argv)

    try:
        config.validate(check_data_dir=not (args.data_dir or args.ephemeral))
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    level = getattr(logging, args.log_level or config.log_level)
    setup_logger("class_manager", level=level, log_file=config.log_file)

    try:
        return run(args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
