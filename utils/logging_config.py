"""
Centralized logging configuration.

Provides JSON-formatted or readable file logging with size-based rollover,
optional date-based file naming, a separate error log and console output.
"""

import json
import logging
import logging.handlers
from pathlib import Path
from datetime import datetime
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from settings.config import LoggingConfig


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs logs as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    log_file: str = "app.log",
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 5,
    console_output: bool = True,
    file_output: bool = True,
    use_json_format: bool = False,
    date_based_files: bool = False,
) -> None:
    """
    Set up centralized logging configuration.

    Args:
        log_level: Logging level (default: logging.INFO)
        log_dir: Directory for log files (default: project_root/logs)
        log_file: Name of log file (default: app.log)
        max_bytes: Maximum log file size before rollover (default: 5MB)
        backup_count: Number of backup log files to keep (default: 5)
        console_output: Whether to output logs to console (default: True)
        file_output: Whether to write log files (default: True)
        use_json_format: Whether to use JSON format for file logs (default: False)
        date_based_files: Whether to use date-based file naming (default: False)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    app_log_file = None
    if file_output:
        # Relative directories resolve against the project root
        project_root = Path(__file__).parent.parent
        if log_dir is None:
            log_dir = project_root / "logs"
        else:
            log_dir = Path(log_dir)
            if not log_dir.is_absolute():
                log_dir = project_root / log_dir

        (log_dir / "app").mkdir(parents=True, exist_ok=True)
        (log_dir / "errors").mkdir(parents=True, exist_ok=True)

        if date_based_files:
            today = datetime.now().strftime("%Y-%m-%d")
            app_log_file = log_dir / "app" / f"app_{today}.log"
            error_log_file = log_dir / "errors" / f"errors_{today}.log"
        else:
            app_log_file = log_dir / "app" / log_file
            error_log_file = log_dir / "errors" / f"errors_{log_file}"

        if use_json_format:
            file_formatter = JSONFormatter()
        else:
            file_formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            )

        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(app_log_file),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)  # Capture all levels in file
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            filename=str(error_log_file),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_formatter)
        root_logger.addHandler(error_handler)

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        f"Logging initialized: app_file={app_log_file}, level={logging.getLevelName(log_level)}, "
        f"json_format={use_json_format}"
    )


def setup_logging_from_config(logging_config: "LoggingConfig") -> None:
    """
    Set up logging from a LoggingConfig.

    Does nothing when logging is disabled.
    """
    if not logging_config.enabled:
        return

    log_level = getattr(logging, logging_config.log_level.upper(), logging.INFO)
    rotation = logging_config.rotation

    setup_logging(
        log_level=log_level,
        log_dir=Path(logging_config.log_dir),
        max_bytes=rotation.get("max_bytes", 10 * 1024 * 1024),
        backup_count=rotation.get("backup_count", 5),
        console_output=logging_config.enable_console_logging,
        file_output=logging_config.enable_file_logging,
        use_json_format=logging_config.use_json_format,
        date_based_files=logging_config.date_based_files,
    )
