"""Command-line interface for inspecting a zdocs hierarchy.

This package provides the `zdocs` CLI tool: configuration loading, session
wiring of the resolution engines, and Rich-based terminal output.
"""

from .config import ConfigLoader
from .models import ExitCode, ZDocsConfig
from .session import ZDocsSession
from .errors import (
    CLIError,
    ConfigError,
    ConfigNotFoundError,
    FilesystemError,
)

__all__ = [
    'ConfigLoader',
    'ExitCode',
    'ZDocsConfig',
    'ZDocsSession',
    'CLIError',
    'ConfigError',
    'ConfigNotFoundError',
    'FilesystemError',
]
