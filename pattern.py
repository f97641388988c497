#!/usr/bin/env python3
"""
Pattern matching and naming for Season Organizer
Provides the season-tag predicate, season folder naming and canonical episode filenames.

All functions here are pure: none of them touch the filesystem.
"""

import re
from typing import Iterable


SEASON_DIR_PREFIX = "Season "

DEFAULT_VIDEO_EXTENSION = '.mkv'
DEFAULT_EXCLUDED_KEYWORDS = ('sample', 'trailer')


def season_number_tag(season_number: int) -> str:
    """
    Build the numeric tag of a season: zero-padded to two digits, wider numbers kept as-is

    The tag is matched literally against filenames and reused in the canonical
    episode name, so season 1 is always "01".
    """
    return f"{season_number:02d}"


def season_dir_name(season_number: int) -> str:
    """
    Build the folder name for a season

    Args:
        season_number: Non-negative season number

    Returns:
        'Season NN', zero-padded to two digits (wider numbers are kept as-is)
    """
    return f"{SEASON_DIR_PREFIX}{season_number_tag(season_number)}"


def matches_season_tag(filename: str, tag: str) -> bool:
    """
    Check whether a filename carries the given season tag

    The filename matches when it contains 's' or 'S' immediately followed by
    the tag, with anything around it ('Show.S01E03.mkv' matches '01').
    """
    return re.search(r'[Ss]' + re.escape(tag), filename) is not None


def is_eligible_video(filename: str,
                      extension: str = DEFAULT_VIDEO_EXTENSION,
                      excluded_keywords: Iterable[str] = DEFAULT_EXCLUDED_KEYWORDS) -> bool:
    """
    Check whether a filename is an eligible episode video

    Args:
        filename: Name of the file (not the full path)
        extension: Video extension including the dot
        excluded_keywords: Substrings that disqualify a file (samples, trailers)

    Returns:
        True if the name ends with the extension and contains none of the
        keywords, all compared case-insensitively
    """
    name = filename.lower()
    if not name.endswith(extension.lower()):
        return False
    return not any(keyword.lower() in name for keyword in excluded_keywords)


def generate_filename(series_name: str, tag: str, episode_index: int,
                      extension: str = DEFAULT_VIDEO_EXTENSION) -> str:
    """
    Generate the canonical episode filename

    Args:
        series_name: Name of the series
        tag: Season tag as found in the season folder name ('02')
        episode_index: 1-based position of the episode within its season
        extension: Extension to append

    Returns:
        '<series> s<tag>e<NN><extension>', e.g. 'Show s02e01.mkv'
    """
    return f"{series_name} s{tag}e{episode_index:02d}{extension}"
