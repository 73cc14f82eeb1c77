"""
Configuration Schema

Settings for reading diagrams and for logging, loadable from environment
variables.
"""

import os
from dataclasses import dataclass, field
from enum import Enum

BPMN_MODEL_NAMESPACE = "http://www.omg.org/spec/BPMN/20100524/MODEL"


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ReaderConfig:
    """Configuration for the BPMN XML reader."""

    # Namespace of <process> and its flow elements
    namespace: str = BPMN_MODEL_NAMESPACE
    process_tag: str = "process"

    # Accept documents that declare no namespace at all
    allow_unqualified: bool = True

    # Let libxml2 recover from malformed markup (e.g. unclosed root)
    recover: bool = False


@dataclass
class SimConfig:
    """Complete configuration."""

    reader: ReaderConfig = field(default_factory=ReaderConfig)

    # Observability
    log_level: LogLevel = LogLevel.WARNING
    json_logs: bool = False

    verbose: bool = False

    @classmethod
    def from_env(cls) -> "SimConfig":
        """Load configuration from environment variables.

        Reads ``BPMN_SIM_LOG_LEVEL``, ``BPMN_SIM_JSON_LOGS`` and
        ``BPMN_SIM_NAMESPACE``.
        """
        try:
            log_level = LogLevel(os.getenv("BPMN_SIM_LOG_LEVEL", LogLevel.WARNING.value).upper())
        except ValueError:
            log_level = LogLevel.WARNING

        reader = ReaderConfig(namespace=os.getenv("BPMN_SIM_NAMESPACE", BPMN_MODEL_NAMESPACE))

        return cls(
            reader=reader,
            log_level=log_level,
            json_logs=os.getenv("BPMN_SIM_JSON_LOGS", "false").lower() in ("1", "true", "yes"),
        )


__all__ = ["BPMN_MODEL_NAMESPACE", "LogLevel", "ReaderConfig", "SimConfig"]
