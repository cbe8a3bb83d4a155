"""Interactive terminal UI."""

from .app import TaskOrganizerApp

__all__ = ["TaskOrganizerApp"]
