"""Adapters — process bindings for the provisioning engine.

Public re-exports for convenient access.
"""

from setup_coding.adapters.base import ProcessAdapter
from setup_coding.adapters.mock import MockProcessAdapter
from setup_coding.adapters.shell.pipeline import SubprocessAdapter

__all__ = [
    "MockProcessAdapter",
    "ProcessAdapter",
    "SubprocessAdapter",
]
