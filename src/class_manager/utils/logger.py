"""
Logging utilities with phone-number masking.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Masking of phone numbers in log messages
- Structured log format
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


# "phone=0300-1234567", "phone: 555 0101", "'phone': '+1 (555) 0101'"
PHONE_PATTERN = re.compile(
    r'(phone["\']?\s*[:=]\s*["\']?)(\+?[\d\s().-]*\d)',
    flags=re.IGNORECASE
)


def mask_phone(phone: str) -> str:
    """
    Mask a phone number for safe logging, keeping the last two digits.

    Examples:
        >>> mask_phone("0300-1234567")
        '*********67'
        >>> mask_phone("12")
        '***'
    """
    digits = re.sub(r'\D', '', phone or "")
    if len(digits) < 3:
        return "***"
    return "*" * (len(digits) - 2) + digits[-2:]


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks phone numbers before output.

    Student records carry phone numbers; any "phone=..." or "phone: ..."
    value in a log message is replaced by its masked form.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask phone numbers in the log record.

        Returns:
            Always True (allows all records through after masking)
        """
        message = record.getMessage()
        masked = PHONE_PATTERN.sub(
            lambda m: m.group(1) + mask_phone(m.group(2)),
            message
        )
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logger(
    name: str = "class_manager",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "class_manager")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger()
        >>> logger.info("Repository loaded")

        >>> logger = setup_logger(
        ...     level=logging.DEBUG,
        ...     log_file="output/logs/class_manager.log"
        ... )
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    sensitive_filter = SensitiveDataFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(sensitive_filter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(sensitive_filter)
        logger.addHandler(file_handler)

    return logger
