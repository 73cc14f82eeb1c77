"""
Observability Infrastructure

Structured logging with loguru. Library modules log through the standard
``logging`` module; ``ObservabilityManager`` routes those records into loguru
sinks so applications configure output in one place.
"""

import json
import logging
import sys
import time
import traceback
from typing import Any, Dict, Optional, Union

from loguru import logger

from bpmn_sim.core.config import LogLevel, SimConfig

_log = logging.getLogger(__name__)


class ObservabilityConfig:
    """Configuration for observability."""

    def __init__(
        self,
        service_name: str = "bpmn-sim",
        log_level: Union[str, LogLevel] = LogLevel.WARNING,
        json_logs: bool = False,
    ):
        """Initialize observability configuration."""
        self.service_name = service_name
        self.log_level = log_level if isinstance(log_level, str) else log_level.value
        self.json_logs = json_logs

    @classmethod
    def from_sim_config(cls, config: SimConfig) -> "ObservabilityConfig":
        level = LogLevel.DEBUG if config.verbose else config.log_level
        return cls(log_level=level, json_logs=config.json_logs)


class JSONFormatter:
    """Custom JSON formatter for loguru."""

    def __call__(self, record: Dict[str, Any]) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "logger": record["name"],
            "function": record["function"],
            "line": record["line"],
            "message": record["message"],
        }

        if record["extra"]:
            log_data["extra"] = record["extra"]

        if record["exception"]:
            log_data["exception"] = {
                "type": record["exception"].type.__name__,
                "value": str(record["exception"].value),
                "traceback": "".join(
                    traceback.format_exception(
                        record["exception"].type,
                        record["exception"].value,
                        record["exception"].tb,
                    )
                ),
            }

        # loguru treats the returned string as a format template
        return json.dumps(log_data).replace("{", "{{").replace("}", "}}") + "\n"


class InterceptHandler(logging.Handler):
    """Forwards standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Union[str, int] = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


class ObservabilityManager:
    """Centralized observability management."""

    _instance: Optional["ObservabilityManager"] = None

    def __init__(self, config: ObservabilityConfig):
        """Initialize observability manager."""
        self.config = config
        self._setup_logging()

        logger.debug(
            f"Observability initialized: service={config.service_name}, "
            f"log_level={config.log_level}"
        )

    def _setup_logging(self) -> None:
        """Set up structured logging with loguru."""
        logger.remove()

        if self.config.json_logs:
            logger.add(
                sys.stderr,
                format=JSONFormatter(),
                level=self.config.log_level,
                colorize=False,
            )
        else:
            log_format = (
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            )
            logger.add(
                sys.stderr,
                format=log_format,
                level=self.config.log_level,
                colorize=True,
                backtrace=True,
                diagnose=False,
            )

        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    @classmethod
    def initialize(cls, config: Optional[ObservabilityConfig] = None) -> "ObservabilityManager":
        """Initialize or reconfigure the singleton instance."""
        cls._instance = cls(config or ObservabilityConfig())
        return cls._instance

    @classmethod
    def get_instance(cls) -> "ObservabilityManager":
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls(ObservabilityConfig())
        return cls._instance


class Timer:
    """Context manager for timing operations."""

    def __init__(self, name: str, log: bool = True):
        """Initialize timer."""
        self.name = name
        self.log = log
        self.start_time: float = 0
        self.elapsed: float = 0

    def __enter__(self) -> "Timer":
        """Enter context."""
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context."""
        self.elapsed = time.perf_counter() - self.start_time
        if self.log:
            _log.debug(f"Timer '{self.name}': {self.elapsed:.3f}s")


__all__ = [
    "LogLevel",
    "ObservabilityConfig",
    "ObservabilityManager",
    "InterceptHandler",
    "JSONFormatter",
    "Timer",
]
