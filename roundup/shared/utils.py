"""
Shared utilities for the AI Weekly Roundup.
===========================================
Provides:
  - setup_logging: consistent logging (console + optional rotating file)
  - save_text:     atomic text write (temp file → rename)
  - ensure_dir:    mkdir -p helper

Keep this file focused and stable; every stage imports from here.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def setup_logging(
    name: str,
    level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure a named logger with console output and optional rotating file.

    Args:
        name:     Logger name (shown in every log line). Child loggers
                  (e.g. "roundup.newsletter.renderer") inherit the handlers.
        level:    "DEBUG" | "INFO" | "WARNING" | "ERROR"
        log_file: If provided, also write to this rotating log file.

    Returns:
        Configured Logger instance.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Avoid duplicate handlers when called multiple times (e.g. in tests)
    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "%(asctime)s | %(name)-36s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # Rotating file handler: 10 MB max, keep 5 backups
    if log_file:
        ensure_dir(Path(log_file).parent)
        fh = RotatingFileHandler(log_file, maxBytes=10_000_000, backupCount=5, encoding="utf-8")
        fh.setLevel(log_level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


# ---------------------------------------------------------------------------
# File persistence
# ---------------------------------------------------------------------------

def save_text(text: str, path: Path, logger: Optional[logging.Logger] = None) -> None:
    """
    Atomically write text to path as UTF-8, creating parent directories.

    Writes to a .tmp file first, then renames to the target path, so a
    half-written page is never left behind for static hosting to serve.
    Raises OSError on failure after removing the temp file.
    """
    log = logger or logging.getLogger(__name__)
    path = Path(path)
    ensure_dir(path.parent)

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        log.error(f"Failed to write {path}: {exc}")
        tmp_path.unlink(missing_ok=True)
        raise


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def ensure_dir(path: Path) -> None:
    """Create directory (and all parents) if it doesn't already exist."""
    Path(path).mkdir(parents=True, exist_ok=True)
