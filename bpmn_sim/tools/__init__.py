"""
bpmn-sim Tools

Command-line interface.
"""

from bpmn_sim.tools.cli import cli

__all__ = ["cli"]
