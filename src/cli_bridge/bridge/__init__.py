"""
Bridge HTTP → processus enfant.
"""

from .executable import resolve_executable_path, check_executable, describe_executable
from .runner import run_executable
from .handler import Bridge, drain_body

__all__ = [
    "resolve_executable_path",
    "check_executable",
    "describe_executable",
    "run_executable",
    "Bridge",
    "drain_body",
]
