"""
File operation utilities.

This module provides the text I/O used by the JSON file store and the
CSV export used by the fee reports.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd


logger = logging.getLogger(__name__)


def read_text(filepath: Path) -> Optional[str]:
    """
    Read a UTF-8 text file.

    Args:
        filepath: File to read

    Returns:
        File contents, or None if the file does not exist

    Raises:
        OSError: If the file exists but cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    if not filepath.exists():
        return None

    with open(filepath, 'r', encoding='utf-8') as f:
        content = f.read()

    logger.debug(f"Read file: {filepath}")
    return content


def write_text(filepath: Path, content: str) -> None:
    """
    Overwrite a UTF-8 text file, creating parent directories.

    The content is written to a sibling temp file first and then moved
    over the target, so a failed write leaves the old content in place.

    Raises:
        OSError: If the file cannot be written
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = filepath.with_name(filepath.name + ".tmp")
    with open(tmp_path, 'w', encoding='utf-8') as f:
        f.write(content)
    tmp_path.replace(filepath)

    logger.debug(f"Wrote file: {filepath}")


def save_csv(df: pd.DataFrame, filepath: Path) -> bool:
    """
    Save DataFrame to CSV file.

    Args:
        df: Pandas DataFrame to save
        filepath: Path to save the CSV file

    Returns:
        True if save successful, False otherwise

    Examples:
        >>> df = pd.DataFrame({"Student": ["Ana"], "Amount": [500.0]})
        >>> save_csv(df, Path("output/fees.csv"))
        True
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(filepath, index=False, encoding='utf-8')

        logger.debug(f"Saved CSV file: {filepath}")
        return True

    except Exception as e:
        logger.error(f"Failed to save CSV file {filepath}: {e}", exc_info=True)
        return False


def generate_filename(prefix: str, extension: str) -> str:
    """
    Generate timestamped filename.

    Examples:
        >>> generate_filename("fees", "csv")
        'fees_20231011_103045.csv'
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{extension}"
