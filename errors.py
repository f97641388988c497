#!/usr/bin/env python3
"""
Error types for Season Organizer
Every error is fatal for the current run and carries the offending path.
"""

from pathlib import Path
from typing import List, Optional


class OrganizerError(Exception):
    """Base class for all organizer failures"""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class InvalidInputError(OrganizerError):
    """Series name, season list or base directory rejected"""


class PathCreationError(OrganizerError):
    """A season directory could not be created"""


class MoveError(OrganizerError):
    """Moving or renaming an entry failed"""

    def __init__(self, source: Path, destination: Path, reason: str = ""):
        message = f"Could not move '{source}' to '{destination}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, source)
        self.source = source
        self.destination = destination


class AmbiguousEpisodeError(OrganizerError):
    """More than one eligible video file inside a single episode entry"""

    def __init__(self, entry_path: Path, candidates: List[Path]):
        super().__init__(
            f"Found more than one video file in '{entry_path}'\n"
            f"Make sure to delete all trailers/samples",
            entry_path
        )
        self.entry_path = entry_path
        self.candidates = candidates


class EmptyListingError(OrganizerError):
    """A directory listing could not be obtained"""

    def __init__(self, path: Path, reason: str = ""):
        message = f"Could not list the contents of '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, path)
