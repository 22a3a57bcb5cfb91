"""
Structured logging for the Game Deals engine.

Every component logs through a ComponentLogger, which serializes the
message and its context as one JSON object under the ``game_deals.<name>``
logger. ``setup_logging`` wires those loggers to stdout and, optionally,
to rotating files.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

ROOT_LOGGER_NAME = "game_deals"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

MB = 1024 * 1024

# filename, errors only, max bytes, backups
LOG_FILES: Tuple[Tuple[str, bool, int, int], ...] = (
    ("game_deals.log", False, 10 * MB, 5),
    ("errors.log", True, 5 * MB, 3),
)


class ComponentLogger:
    """
    Logger that emits JSON payloads tagged with a component name.

    Context given at construction (or through ``bind``) is merged into
    every payload; per-call ``extra`` fields win on key clashes.
    """

    def __init__(self, component_name: str, extra_context: Optional[Dict[str, Any]] = None):
        """
        Initialize the logger.

        Args:
            component_name: Dotted component name, e.g. ``fx.service``
            extra_context: Fields added to every payload
        """
        self.component_name = component_name
        self.extra_context = dict(extra_context or {})
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component_name}")

    def bind(self, **context: Any) -> "ComponentLogger":
        """New logger for the same component with additional context."""
        return ComponentLogger(self.component_name, {**self.extra_context, **context})

    def _format_message(self, message: str, extra: Optional[Dict[str, Any]] = None) -> str:
        payload = {
            "timestamp": datetime.now().isoformat(),
            "component": self.component_name,
            "message": message,
            **self.extra_context,
            **(extra or {}),
        }
        return json.dumps(payload, default=str)

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]], **kwargs):
        getattr(self.logger, level)(self._format_message(message, extra), **kwargs)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("debug", message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("info", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("warning", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log an error; ``exc_info`` attaches the active traceback."""
        if exc_info:
            extra = {**(extra or {}), "exception": True}
        self._emit("error", message, extra, exc_info=exc_info)


def _level(name: str) -> int:
    return getattr(logging, name.upper())


class LoggingManager:
    """
    Owns the handlers of the ``game_deals`` logger tree.

    Console output always; a main log and an errors-only log, both
    rotating, when a log directory is configured.
    """

    def __init__(self, log_dir: Optional[str] = None, log_level: str = "INFO"):
        """
        Initialize and install handlers.

        Args:
            log_dir: Directory for log files; console only when None
            log_level: Level name for the logger and non-error handlers
        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = _level(log_level)
        self.component_loggers: Dict[Tuple[str, str], ComponentLogger] = {}

        self._install_handlers()

    def _install_handlers(self):
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(self.log_level)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        handlers = [logging.StreamHandler(sys.stdout)]
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            for filename, errors_only, max_bytes, backups in LOG_FILES:
                handler = logging.handlers.RotatingFileHandler(
                    self.log_dir / filename, maxBytes=max_bytes, backupCount=backups
                )
                handler.errors_only = errors_only
                handlers.append(handler)

        formatter = logging.Formatter(LOG_FORMAT)
        for handler in handlers:
            handler.setFormatter(formatter)
            errors_only = getattr(handler, "errors_only", False)
            handler.setLevel(logging.ERROR if errors_only else self.log_level)
            root_logger.addHandler(handler)

    def get_component_logger(
        self, component_name: str, extra_context: Optional[Dict[str, Any]] = None
    ) -> ComponentLogger:
        """Shared ComponentLogger per (component, context) pair."""
        key = (component_name, json.dumps(extra_context or {}, sort_keys=True, default=str))
        if key not in self.component_loggers:
            self.component_loggers[key] = ComponentLogger(component_name, extra_context)
        return self.component_loggers[key]

    def set_log_level(self, level: str):
        """Change the level everywhere except the errors-only file."""
        self.log_level = _level(level)
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(self.log_level)
        for handler in root_logger.handlers:
            if not getattr(handler, "errors_only", False):
                handler.setLevel(self.log_level)


_logging_manager: Optional[LoggingManager] = None


def setup_logging(log_dir: Optional[str] = None, log_level: str = "INFO") -> LoggingManager:
    """
    Configure logging for the process.

    Args:
        log_dir: Directory for rotating log files; console only when None
        log_level: Level name, e.g. ``"DEBUG"``

    Returns:
        The installed LoggingManager
    """
    global _logging_manager
    _logging_manager = LoggingManager(log_dir, log_level)
    return _logging_manager


def get_logger(component_name: str, extra_context: Optional[Dict[str, Any]] = None) -> ComponentLogger:
    """
    Component logger, shared when logging has been set up.

    Before ``setup_logging`` a fresh logger is returned; it still works
    through the standard logging hierarchy.
    """
    if _logging_manager is None:
        return ComponentLogger(component_name, extra_context)
    return _logging_manager.get_component_logger(component_name, extra_context)
