#!/usr/bin/env python3
"""
Utility functions for Season Organizer
Provides helpers for parsing and validating operator input.
"""

import re
from pathlib import Path
from typing import List, Optional, Tuple


# Numbers separated by whitespace and/or commas, e.g. "2,3,9 7 11"
SEASON_LIST_PATTERN = re.compile(r'[\s,]*\d+(?:[\s,]+\d+)*[\s,]*')

YES_ANSWERS = {'Y', 'YES'}
NO_ANSWERS = {'N', 'NO'}


def parse_season_list(text: str) -> Optional[List[int]]:
    """
    Parse a season list typed by the operator

    Args:
        text: Raw input such as "2,3,9 7 11"

    Returns:
        Distinct season numbers in ascending order, or None if the input
        is not a list of numbers
    """
    text = text.strip()
    if not text or not SEASON_LIST_PATTERN.fullmatch(text):
        return None

    seasons = {int(number) for number in re.findall(r'\d+', text)}
    return sorted(seasons)


def parse_yes_no(answer: str) -> Optional[bool]:
    """Map Y/YES to True and N/NO to False (case-insensitive), anything else to None"""
    answer = answer.strip().upper()
    if answer in YES_ANSWERS:
        return True
    if answer in NO_ANSWERS:
        return False
    return None


def validate_directory(path_string: str) -> Tuple[Optional[Path], Optional[str]]:
    """
    Validate a directory path typed by the operator

    Returns:
        Tuple of (path, error) where exactly one is None:
        - path: the directory if it exists and is a folder
        - error: message explaining why the path was rejected
    """
    path_string = path_string.strip()
    if not path_string or '\0' in path_string:
        return None, "Invalid Path."

    path = Path(path_string).expanduser()
    if not path.exists():
        return None, "Path doesn't exist."
    if not path.is_dir():
        return None, "Path exists but is not a folder."
    return path, None
