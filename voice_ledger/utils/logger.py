"""Logging configuration for the application."""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config.settings import LOG_LEVEL, LOG_FILE

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str = "voice_ledger",
    level: Optional[str] = None,
    log_file: Optional[Path] = LOG_FILE
) -> logging.Logger:
    """
    Configure the package logger once per process.

    Warnings go to stderr, so stdout carries only command output (the
    JSON of `interpret --json` included). The log file keeps everything
    down to DEBUG, audit lines among them.

    Args:
        name: Logger name
        level: Logger level name (defaults to LOG_LEVEL setting)
        log_file: Log file path, or None to log to the console only

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    logger.addHandler(_stderr_handler())

    if log_file is not None:
        try:
            logger.addHandler(_file_handler(Path(log_file)))
        except OSError as e:
            logger.warning(f"Logging to console only, cannot open {log_file}: {e}")

    return logger


def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def log_interpretation_audit(
    source: str,
    transaction_type: str,
    category: str,
    amount: float,
    confidence: float,
    transcript_length: int,
    fallback_reason: Optional[str] = None
) -> None:
    """
    Log one interpretation as a structured audit line.

    Args:
        source: Path that produced the result ("nlu" or "fallback")
        transaction_type: Resolved type value
        category: Resolved category
        amount: Resolved amount
        confidence: Confidence score (0-1)
        transcript_length: Length of the transcript in characters
        fallback_reason: Why the remote path was skipped or failed
    """
    logger = logging.getLogger("voice_ledger.audit")

    audit_data = {
        "timestamp": datetime.now().isoformat(),
        "source": source,
        "type": transaction_type,
        "category": category,
        "amount": amount,
        "confidence": f"{confidence:.2f}",
        "transcript_chars": transcript_length,
    }

    if fallback_reason:
        audit_data["fallback_reason"] = fallback_reason

    audit_message = " | ".join(f"{k}={v}" for k, v in audit_data.items())
    logger.info(f"AUDIT: {audit_message}")
