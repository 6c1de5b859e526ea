"""
Utilities package for the MetaCoach application.
"""

from .execution_timer import ExecutionTimer

__all__ = ["ExecutionTimer"]
