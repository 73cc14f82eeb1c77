"""
Core infrastructure module for bpmn-sim.

Provides configuration and logging/observability setup.
"""

from .config import BPMN_MODEL_NAMESPACE, LogLevel, ReaderConfig, SimConfig
from .observability import ObservabilityConfig, ObservabilityManager, Timer

__all__ = [
    # Configuration
    "BPMN_MODEL_NAMESPACE",
    "LogLevel",
    "ReaderConfig",
    "SimConfig",
    # Observability
    "ObservabilityConfig",
    "ObservabilityManager",
    "Timer",
]
