"""
Adapters layer - External event sources.
"""

from .agenda_file import AgendaFileEventSource

__all__ = ["AgendaFileEventSource"]
