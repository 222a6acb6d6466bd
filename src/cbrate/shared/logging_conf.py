# src/cbrate/shared/logging_conf.py
"""
Logging Configuration - Logging Setup and Configuration

This module provides centralized logging configuration for the entire application.
Modules log through `logging.getLogger(__name__)`; this module only decides
where records go (stdout, a rotating file, or both) and how they look.

Files that USE this module:
- cbrate.app (setup_logging function for logging initialization)

Files that this module USES:
- None (pure configuration module)
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    log_stdout: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure application-wide logging settings.
    
    Can output to stdout, file, or both. Supports log rotation for file logging.
    
    Args:
        level: Logging level or its name (default: logging.INFO)
        log_file: Optional path to log file (enables file logging)
        log_dir: Optional directory for log files (file is named cbrate.log)
        log_stdout: Whether to log to stdout
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup log files to keep (default: 5)
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers = []
    
    if log_stdout:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(formatter)
        handlers.append(stdout_handler)
    
    log_file_path: Optional[Path] = None
    if log_file or log_dir:
        if log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file_path = log_dir / "cbrate.log"
        else:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
    
    # Logging must go somewhere
    if not handlers:
        handlers = [logging.StreamHandler(sys.stderr)]
    
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
    
    logger = logging.getLogger(__name__)
    if log_file_path is not None:
        logger.debug("Logging configured: file=%s, level=%s", log_file_path, level)
    else:
        logger.debug("Logging configured: stdout, level=%s", level)
