#!/usr/bin/env python3
"""
Pattern matching and naming tests.

Tests all functions from pattern.py:
- season_dir_name / season_number_tag: Season folder naming and tags
- matches_season_tag: Season tag predicate used by the classifier
- is_eligible_video: Video filter used when flattening episode folders
- generate_filename: Canonical episode filenames
"""

import sys
from pathlib import Path

# Add parent directory to path to import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pattern import (
    season_dir_name,
    season_number_tag,
    matches_season_tag,
    is_eligible_video,
    generate_filename,
)


class TestSeasonNaming:
    """Tests for season_dir_name and season_number_tag"""

    def test_season_dir_name_padding(self):
        assert season_dir_name(0) == "Season 00"
        assert season_dir_name(3) == "Season 03"
        assert season_dir_name(12) == "Season 12"

    def test_season_dir_name_wide_numbers(self):
        """Numbers wider than two digits are printed as-is"""
        assert season_dir_name(123) == "Season 123"

    def test_season_number_tag(self):
        assert season_number_tag(0) == "00"
        assert season_number_tag(1) == "01"
        assert season_number_tag(10) == "10"
        assert season_number_tag(100) == "100"

    def test_folder_name_ends_with_tag(self):
        for number in (0, 7, 42, 123):
            assert season_dir_name(number) == f"Season {season_number_tag(number)}"


class TestSeasonTagMatching:
    """Tests for matches_season_tag"""

    def test_matches_upper_and_lower_s(self):
        assert matches_season_tag("Show.S01E03.mkv", "01")
        assert matches_season_tag("show.s01e03.mkv", "01")

    def test_tag_anywhere_in_name(self):
        assert matches_season_tag("[Group] Show s02 - 05 [1080p]", "02")
        assert matches_season_tag("s02", "02")

    def test_requires_s_directly_before_tag(self):
        assert not matches_season_tag("Show 01x03.mkv", "01")
        assert not matches_season_tag("Show.Season.01.mkv", "01")
        assert not matches_season_tag("Show.S1E03.mkv", "01")

    def test_different_season(self):
        assert not matches_season_tag("Show.S02E01.mkv", "01")

    def test_prefix_looseness(self):
        """The tag is matched as a prefix, 'S010' carries tag '01'"""
        assert matches_season_tag("Show.S010E01.mkv", "01")
        assert matches_season_tag("Show.S010E01.mkv", "010")


class TestEligibleVideo:
    """Tests for is_eligible_video"""

    def test_extension(self):
        assert is_eligible_video("Show.S01E01.mkv")
        assert is_eligible_video("Show.S01E01.MKV")
        assert not is_eligible_video("Show.S01E01.mp4")
        assert not is_eligible_video("Show.S01E01.mkv.part")

    def test_sample_and_trailer_excluded(self):
        assert not is_eligible_video("Show.S01E01.sample.mkv")
        assert not is_eligible_video("SAMPLE-show.mkv")
        assert not is_eligible_video("Show.Trailer.mkv")

    def test_custom_extension_and_keywords(self):
        assert is_eligible_video("episode.mp4", extension=".mp4")
        assert not is_eligible_video("episode.preview.mp4", extension=".mp4", excluded_keywords=["preview"])
        assert is_eligible_video("episode.sample.mp4", extension=".mp4", excluded_keywords=[])


class TestGenerateFilename:
    """Tests for generate_filename"""

    def test_canonical_name(self):
        assert generate_filename("Show", "02", 1) == "Show s02e01.mkv"
        assert generate_filename("The Show", "10", 12) == "The Show s10e12.mkv"

    def test_wide_numbers(self):
        assert generate_filename("Show", "100", 123) == "Show s100e123.mkv"

    def test_custom_extension(self):
        assert generate_filename("Show", "01", 3, ".mp4") == "Show s01e03.mp4"


def run_all_tests():
    """Run all pattern tests"""
    print("=" * 80)
    print("Pattern Test Suite")
    print("=" * 80)

    results = []
    for test_class in (TestSeasonNaming, TestSeasonTagMatching, TestEligibleVideo, TestGenerateFilename):
        instance = test_class()
        for name in sorted(dir(instance)):
            if not name.startswith("test_"):
                continue
            try:
                getattr(instance, name)()
                results.append((f"{test_class.__name__}.{name}", True))
            except AssertionError as e:
                print(f"  {test_class.__name__}.{name}: {e}")
                results.append((f"{test_class.__name__}.{name}", False))

    passed = sum(1 for _, result in results if result)
    for test_name, result in results:
        status = "[PASS]" if result else "[FAIL]"
        print(f"  {status}: {test_name}")
    print(f"\nTotal: {passed}/{len(results)} tests passed")

    return 0 if passed == len(results) else 1


if __name__ == '__main__':
    sys.exit(run_all_tests())
