#!/usr/bin/env python3
"""
Episode video extraction for Season Organizer
Finds the single video file inside an episode entry so it can be flattened into the season folder.

Two strategies share the EpisodeExtractor interface:
1. NestedEpisodeExtractor walks the whole episode folder and ignores samples/trailers
2. FlatEpisodeExtractor only looks at files directly inside the episode folder
"""

import os
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from errors import AmbiguousEpisodeError, EmptyListingError
from model import ExtractionStrategy
from pattern import is_eligible_video, DEFAULT_VIDEO_EXTENSION, DEFAULT_EXCLUDED_KEYWORDS
from logger import get_logger


class EpisodeExtractor:
    """Base class for episode video extraction strategies"""

    def __init__(self, video_extension: str = DEFAULT_VIDEO_EXTENSION,
                 logger: Optional[logging.Logger] = None):
        self.video_extension = video_extension
        self.logger = logger or get_logger()

    def is_candidate(self, filename: str) -> bool:
        """Check whether a filename can be the episode video"""
        return filename.lower().endswith(self.video_extension.lower())

    def find_candidates(self, directory: Path) -> List[Path]:
        """Return the eligible video files of an episode folder, sorted by path"""
        raise NotImplementedError

    def extract_episode_video(self, entry_path: Path) -> Optional[Path]:
        """
        Find the video file of one episode entry

        Args:
            entry_path: Episode file or folder inside a season directory

        Returns:
            The entry itself when it is a plain file that qualifies as a video,
            otherwise the single eligible video inside the folder, or None if
            there is none

        Raises:
            AmbiguousEpisodeError: If the folder holds more than one eligible video
            EmptyListingError: If the folder cannot be listed
        """
        if not entry_path.is_dir():
            if self.is_candidate(entry_path.name):
                return entry_path
            self.logger.info(f"  {entry_path.name} is not an episode video")
            return None

        candidates = self.find_candidates(entry_path)
        if len(candidates) > 1:
            raise AmbiguousEpisodeError(entry_path, candidates)
        if not candidates:
            self.logger.warning(f"No video file found in {entry_path}")
            return None

        self.logger.debug(f"  Found {candidates[0].relative_to(entry_path)} in {entry_path.name}")
        return candidates[0]


class NestedEpisodeExtractor(EpisodeExtractor):
    """Walks the full subtree, skipping files whose name mentions a sample or trailer"""

    def __init__(self, video_extension: str = DEFAULT_VIDEO_EXTENSION,
                 excluded_keywords: Iterable[str] = DEFAULT_EXCLUDED_KEYWORDS,
                 logger: Optional[logging.Logger] = None):
        super().__init__(video_extension, logger)
        self.excluded_keywords = list(excluded_keywords)

    def is_candidate(self, filename: str) -> bool:
        return is_eligible_video(filename, self.video_extension, self.excluded_keywords)

    def find_candidates(self, directory: Path) -> List[Path]:
        def raise_listing_error(error: OSError):
            raise EmptyListingError(Path(error.filename or directory), error.strerror or str(error)) from error

        candidates = []
        for root, _dirs, files in os.walk(directory, onerror=raise_listing_error):
            for filename in files:
                if self.is_candidate(filename):
                    candidates.append(Path(root) / filename)
                else:
                    self.logger.debug(f"  Ignoring {filename}")
        return sorted(candidates)


class FlatEpisodeExtractor(EpisodeExtractor):
    """Takes the video file lying directly inside the episode folder"""

    def find_candidates(self, directory: Path) -> List[Path]:
        try:
            children = list(directory.iterdir())
        except OSError as e:
            raise EmptyListingError(directory, e.strerror or str(e)) from e

        return sorted(child for child in children if child.is_file() and self.is_candidate(child.name))


def create_extractor(strategy: ExtractionStrategy,
                     video_extension: str = DEFAULT_VIDEO_EXTENSION,
                     excluded_keywords: Iterable[str] = DEFAULT_EXCLUDED_KEYWORDS,
                     logger: Optional[logging.Logger] = None) -> EpisodeExtractor:
    """Build the extractor for a configured strategy"""
    if strategy == ExtractionStrategy.FLAT:
        return FlatEpisodeExtractor(video_extension, logger)
    return NestedEpisodeExtractor(video_extension, excluded_keywords, logger)
