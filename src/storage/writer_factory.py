# src/storage/writer_factory.py - v1
"""Factory: instantiate output writer from configuration."""

from __future__ import annotations

from sonar.config.settings import Settings
from sonar.storage.base_output_writer import BaseOutputWriter
from sonar.storage.local_writer import LocalWriter


def create_writer(settings: Settings | None = None) -> BaseOutputWriter:
    """Create the output writer.

    Compiled stylesheets are served straight from the destination root, so
    only the local filesystem backend is available.
    """
    return LocalWriter()
