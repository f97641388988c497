#!/usr/bin/env python3
"""
Data models for Season Organizer
Defines the season directories, episode entries and buckets the pipeline works on.
"""

from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum


class ExtractionStrategy(Enum):
    NESTED = "nested"  # Walk the whole episode folder, skip samples/trailers
    FLAT = "flat"  # Video sits directly inside the episode folder


class MovePolicy(Enum):
    TRUST_CLASSIFIER = "trust-classifier"  # Move everything that was classified
    STRICT = "strict"  # Re-check the season tag right before each move


class RenameOrder(Enum):
    NAME = "name"  # Lexicographic by current filename
    FILESYSTEM = "filesystem"  # Whatever order the OS lists the directory in


@dataclass
class SeasonDirectory:
    """A 'Season NN' folder inside the base directory"""
    path: Path
    season_number: int
    tag: str  # Digits as they appear in the folder name, e.g. "01"

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class EpisodeEntry:
    """A top-level file or folder being organized"""
    original_path: Path
    path: Path = None  # Current location, updated after every move
    is_dir: bool = False
    video_path: Optional[Path] = None  # Extracted video, set by the flatten pass

    def __post_init__(self):
        if self.path is None:
            self.path = self.original_path

    @property
    def name(self) -> str:
        return self.original_path.name


@dataclass
class SeasonBucket:
    """Episode entries assigned to one season directory, in insertion order"""
    season: SeasonDirectory
    entries: List[EpisodeEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class OrganizeResult:
    """Outcome of a complete organize run"""
    series_name: str
    season_dirs: List[SeasonDirectory]
    buckets: List[SeasonBucket]
    unclassified: List[EpisodeEntry] = field(default_factory=list)
    moved: int = 0
    extracted: int = 0
    deleted: int = 0
    renamed: List[Path] = field(default_factory=list)
