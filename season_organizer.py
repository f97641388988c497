#!/usr/bin/env python3
"""
Season Organizer
Sorts a flat folder of downloaded episodes into 'Season NN' folders and renames
every episode to '<Series> sNNeNN.mkv'.

The run is split into phases that execute one after another:
1. Plan: create the 'Season NN' folders
2. Classify: assign top-level entries to seasons by their 'sNN' tag
3. Move: move each classified entry into its season folder
4. Flatten: pull the episode video out of nested folders and delete the rest
5. Rename: number the files of each season folder sequentially

Any failure stops the run immediately; completed moves are not rolled back.
"""

import os
import sys
import shutil
import argparse
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import yaml

from config import OrganizerConfig, load_config
from errors import (
    OrganizerError,
    InvalidInputError,
    PathCreationError,
    MoveError,
    EmptyListingError,
)
from extractor import create_extractor
from frontend import FrontEnd, ConsoleFrontEnd
from logger import Colors, get_logger, setup_logging, new_log_file, cleanup_old_logs
from model import (
    EpisodeEntry,
    MovePolicy,
    OrganizeResult,
    RenameOrder,
    SeasonBucket,
    SeasonDirectory,
)
from pattern import season_dir_name, season_number_tag, matches_season_tag, generate_filename

__version__ = "1.0.0"

# Left out of the single-season fallback so an existing first season folder is never swallowed
FALLBACK_EXCLUDED_NAME = "Season 01"


class SeasonOrganizer:
    """Runs the plan / classify / move / flatten / rename pipeline for one series"""

    def __init__(self, config: Optional[OrganizerConfig] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config or OrganizerConfig()
        self.logger = logger or get_logger()
        self.extractor = create_extractor(
            self.config.extraction,
            video_extension=self.config.video_extension,
            excluded_keywords=self.config.excluded_keywords,
            logger=self.logger
        )

        self.stats = {
            'seasons_processed': 0,
            'entries_moved': 0,
            'videos_extracted': 0,
            'entries_deleted': 0,
            'files_renamed': 0
        }

    # ------------------------------------------------------------------
    # Filesystem primitives
    # ------------------------------------------------------------------

    def _move(self, source: Path, destination: Path) -> None:
        """Move a file or folder, refusing to overwrite anything"""
        if os.path.lexists(destination):
            raise MoveError(source, destination, "destination already exists")
        if not os.path.lexists(source):
            raise MoveError(source, destination, "source no longer exists")
        try:
            shutil.move(str(source), str(destination))
        except OSError as e:
            raise MoveError(source, destination, str(e)) from e
        self.logger.debug(f"  Moved {source} -> {destination}")

    def _delete_tree(self, path: Path) -> None:
        """Delete an episode folder deepest entries first, or a single leftover file"""
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            raise OrganizerError(f"Could not delete '{path}': {e}", path) from e
        self.logger.debug(f"  Deleted {path}")

    def _list_entries(self, directory: Path) -> List[Path]:
        """List a directory sorted by name"""
        try:
            return sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise EmptyListingError(directory, e.strerror or str(e)) from e

    # ------------------------------------------------------------------
    # Phase 1: plan season folders
    # ------------------------------------------------------------------

    def plan_season_paths(self, base_dir: Path, seasons: Iterable[int]) -> List[SeasonDirectory]:
        """
        Create the 'Season NN' folders for the requested seasons

        Args:
            base_dir: Folder holding the downloaded episodes
            seasons: Season numbers (duplicates are ignored)

        Returns:
            Season directories sorted by the string form of their path, which
            is the processing order for every later phase

        Raises:
            PathCreationError: If a season folder cannot be created
        """
        season_dirs = []
        for number in set(seasons):
            name = season_dir_name(number)
            season_dirs.append(SeasonDirectory(
                path=base_dir / name,
                season_number=number,
                tag=season_number_tag(number)
            ))
        season_dirs.sort(key=lambda s: str(s.path))

        for season in season_dirs:
            if season.path.is_dir():
                self.logger.debug(f"  {season.name} already exists")
                continue
            if os.path.lexists(season.path):
                raise PathCreationError(
                    f"Cannot create '{season.path}': a file with that name already exists",
                    season.path
                )
            try:
                season.path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise PathCreationError(f"Cannot create '{season.path}': {e}", season.path) from e
            self.logger.info(f"Created {Colors.CYAN}{season.name}{Colors.RESET}")

        return season_dirs

    # ------------------------------------------------------------------
    # Phase 2: classify
    # ------------------------------------------------------------------

    def classify(self, base_dir: Path,
                 season_dirs: List[SeasonDirectory]) -> Tuple[List[SeasonBucket], List[EpisodeEntry]]:
        """
        Assign the top-level entries of base_dir to season buckets

        An entry is added to every season whose tag it carries. When a single
        season was requested and nothing carries its tag, every entry except a
        literal 'Season 01' folder goes into that season.

        Returns:
            Tuple of (buckets in season order, unclassified entries)

        Raises:
            EmptyListingError: If base_dir cannot be listed
        """
        season_paths = {season.path for season in season_dirs}
        paths = [p for p in self._list_entries(base_dir) if p not in season_paths]

        buckets = [SeasonBucket(season=season) for season in season_dirs]
        for bucket in buckets:
            for path in paths:
                if matches_season_tag(path.name, bucket.season.tag):
                    bucket.entries.append(EpisodeEntry(original_path=path, is_dir=path.is_dir()))

        if len(buckets) == 1 and not buckets[0].entries:
            self.logger.info(
                f"No file carries the tag of {buckets[0].season.name}, "
                f"assigning every entry to it"
            )
            buckets[0].entries = [
                EpisodeEntry(original_path=path, is_dir=path.is_dir())
                for path in paths
                if path.name != FALLBACK_EXCLUDED_NAME
            ]

        classified = {entry.original_path for bucket in buckets for entry in bucket.entries}
        unclassified = [EpisodeEntry(original_path=path, is_dir=path.is_dir())
                        for path in paths if path not in classified]

        for bucket in buckets:
            self.logger.info(f"{bucket.season.name}: {len(bucket)} entries")
            for entry in bucket.entries:
                self.logger.debug(f"  {entry.name}")
        if unclassified:
            self.logger.warning(f"{len(unclassified)} entries match no season and are left untouched")
            for entry in unclassified:
                self.logger.debug(f"  {entry.name}")

        return buckets, unclassified

    # ------------------------------------------------------------------
    # Phase 3: move into season folders
    # ------------------------------------------------------------------

    def move_buckets(self, buckets: List[SeasonBucket], unclassified: List[EpisodeEntry],
                     front_end: Optional[FrontEnd] = None) -> int:
        """
        Move every bucket entry into its season folder

        With the strict move policy an entry whose name does not carry the
        season tag is skipped and handed back to the unclassified list.

        Returns:
            Number of entries moved

        Raises:
            MoveError: On the first move that fails
        """
        front_end = front_end or FrontEnd()
        strict = self.config.move_policy == MovePolicy.STRICT
        moved = 0

        for bucket in buckets:
            front_end.on_bucket_start(bucket.season)
            total = len(bucket)
            kept = []
            for entry in bucket.entries:
                if strict and not matches_season_tag(entry.name, bucket.season.tag):
                    self.logger.debug(f"  Skipping {entry.name} (no {bucket.season.tag} tag)")
                    if all(e.original_path != entry.original_path for e in unclassified):
                        unclassified.append(entry)
                    continue

                destination = bucket.season.path / entry.name
                self._move(entry.path, destination)
                entry.path = destination
                kept.append(entry)
                moved += 1
                front_end.on_progress(len(kept) / total)

            bucket.entries = kept
            front_end.on_bucket_done()

        self.stats['entries_moved'] += moved
        return moved

    # ------------------------------------------------------------------
    # Phase 4: flatten episode folders
    # ------------------------------------------------------------------

    def flatten_buckets(self, buckets: List[SeasonBucket]) -> Tuple[int, int]:
        """
        Pull the episode video out of every folder entry and delete the folder

        Plain files that do not qualify as episode videos (subtitles, samples,
        trailers) are deleted as well, so only episodes are left to rename.

        All folders are inspected before anything moves, so an ambiguous
        episode stops the run with the season folders still untouched.

        Returns:
            Tuple of (videos extracted, entries deleted)

        Raises:
            AmbiguousEpisodeError: If a folder holds more than one eligible video
            MoveError: If a video cannot be moved to its season folder
        """
        pending = []
        for bucket in buckets:
            for entry in bucket.entries:
                video = self.extractor.extract_episode_video(entry.path)
                if not entry.is_dir and video is not None:
                    entry.video_path = entry.path
                    continue
                pending.append((bucket, entry, video))

        extracted = 0
        for bucket, entry, video in pending:
            if video is None:
                continue
            destination = bucket.season.path / video.name
            self._move(video, destination)
            entry.video_path = destination
            extracted += 1

        deleted = 0
        for _bucket, entry, _video in pending:
            self._delete_tree(entry.path)
            entry.path = entry.video_path
            deleted += 1

        self.stats['videos_extracted'] += extracted
        self.stats['entries_deleted'] += deleted
        return extracted, deleted

    # ------------------------------------------------------------------
    # Phase 5: rename
    # ------------------------------------------------------------------

    def list_season_files(self, season: SeasonDirectory) -> List[Path]:
        """List the files of a season folder in the configured rename order"""
        try:
            with os.scandir(season.path) as it:
                files = [Path(entry.path) for entry in it if entry.is_file()]
        except OSError as e:
            raise EmptyListingError(season.path, e.strerror or str(e)) from e

        if self.config.rename_order == RenameOrder.NAME:
            files.sort(key=lambda p: p.name)
        return files

    def rename_season(self, season: SeasonDirectory, series_name: str) -> List[Path]:
        """
        Rename the files of a season folder to '<series> s<tag>e<NN>'

        Files already carrying their target name are left alone.

        Returns:
            Final paths in episode order

        Raises:
            MoveError: If a target name is taken by another file
        """
        renamed = []
        for index, source in enumerate(self.list_season_files(season), 1):
            destination = season.path / generate_filename(
                series_name, season.tag, index, self.config.video_extension
            )
            if source == destination:
                self.logger.debug(f"  {source.name} already has its final name")
            else:
                self._move(source, destination)
                self.stats['files_renamed'] += 1
                self.logger.info(f"  {source.name} -> {Colors.CYAN}{destination.name}{Colors.RESET}")
            renamed.append(destination)
        return renamed

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def _validate(self, series_name: str, seasons: Iterable[int],
                  base_dir: Union[str, Path]) -> Tuple[str, List[int], Path]:
        if not isinstance(series_name, str) or not series_name.strip():
            raise InvalidInputError("Series name must not be blank")

        seasons = list(seasons)
        if not seasons:
            raise InvalidInputError("At least one season is required")
        for number in seasons:
            if isinstance(number, bool) or not isinstance(number, int) or number < 0:
                raise InvalidInputError(f"Invalid season number: {number!r}")

        base_dir = Path(base_dir)
        if not base_dir.is_dir():
            raise InvalidInputError(f"'{base_dir}' is not an existing folder", base_dir)

        return series_name.strip(), seasons, base_dir

    def organize(self, series_name: str, seasons: Iterable[int], base_dir: Union[str, Path],
                 front_end: Optional[FrontEnd] = None) -> OrganizeResult:
        """
        Organize one series folder

        Args:
            series_name: Name used for the renamed files
            seasons: Downloaded season numbers
            base_dir: Folder holding all downloaded episodes
            front_end: Receives progress and is asked to pause between the
                       move phase and the flatten/rename phases

        Returns:
            OrganizeResult describing what was done

        Raises:
            OrganizerError: On the first failure; nothing is rolled back
        """
        series_name, seasons, base_dir = self._validate(series_name, seasons, base_dir)
        front_end = front_end or FrontEnd()

        self.logger.info(f"Series: {Colors.CYAN}{series_name}{Colors.RESET}")
        self.logger.info(f"Folder: {Colors.YELLOW}{base_dir}{Colors.RESET}")
        self.logger.info(
            f"Policies: extraction={self.config.extraction.value}, "
            f"move={self.config.move_policy.value}, order={self.config.rename_order.value}"
        )

        season_dirs = self.plan_season_paths(base_dir, seasons)
        buckets, unclassified = self.classify(base_dir, season_dirs)

        self.logger.info("--- Moving files into separate folders for each season ---")
        moved = self.move_buckets(buckets, unclassified, front_end)

        front_end.await_continue()

        extracted, deleted = self.flatten_buckets(buckets)

        renamed = []
        for season in season_dirs:
            self.logger.info(f"Renaming {Colors.CYAN}{season.name}{Colors.RESET}")
            renamed.extend(self.rename_season(season, series_name))
            self.stats['seasons_processed'] += 1

        return OrganizeResult(
            series_name=series_name,
            season_dirs=season_dirs,
            buckets=buckets,
            unclassified=unclassified,
            moved=moved,
            extracted=extracted,
            deleted=deleted,
            renamed=renamed
        )

    def print_summary(self, result: OrganizeResult) -> None:
        """Print operation summary"""
        self.logger.info(f"{Colors.BOLD}{'=' * 60}{Colors.RESET}")
        self.logger.info(f"{Colors.BOLD}OPERATION SUMMARY{Colors.RESET}")
        self.logger.info(f"{Colors.BOLD}{'=' * 60}{Colors.RESET}")
        self.logger.info(f"Seasons Processed: {Colors.CYAN}{self.stats['seasons_processed']}{Colors.RESET}")
        self.logger.info(f"Entries Moved: {Colors.CYAN}{self.stats['entries_moved']}{Colors.RESET}")
        self.logger.info(f"Videos Extracted: {Colors.CYAN}{self.stats['videos_extracted']}{Colors.RESET}")
        self.logger.info(f"Entries Deleted: {Colors.CYAN}{self.stats['entries_deleted']}{Colors.RESET}")
        self.logger.info(f"Files Renamed: {Colors.CYAN}{self.stats['files_renamed']}{Colors.RESET}")

        if result.unclassified:
            self.logger.info(f"{Colors.BOLD}Left untouched:{Colors.RESET}")
            for entry in result.unclassified:
                self.logger.info(f"  {Colors.YELLOW}{entry.name}{Colors.RESET}")


def main(argv: Optional[List[str]] = None, front_end: Optional[ConsoleFrontEnd] = None) -> int:
    """
    Main entry point

    Args:
        argv: Command line arguments, defaults to sys.argv
        front_end: Console front-end to prompt through, built from the config if None

    Returns:
        0 on success, 1 on a configuration error, a fatal organizer error or cancellation
    """
    parser = argparse.ArgumentParser(
        description="Season Organizer - Sort downloaded episodes into season folders and rename them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The series name, the downloaded seasons and the folder are asked interactively.

Examples:
  %(prog)s
  %(prog)s --config ~/season_organizer.yaml --verbose
        """
    )
    parser.add_argument('--config', help='Path to config.yaml (default: ./config.yaml if present)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    parser.add_argument('--log-dir', help='Directory to save log files (default: project_root/logs)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, yaml.YAMLError, ValueError) as e:
        print(f"{Colors.RED}Configuration error: {e}{Colors.RESET}")
        return 1

    log_dir = Path(args.log_dir or config.logging.log_dir or Path(__file__).parent / "logs")
    log_file = new_log_file(log_dir.expanduser().resolve())
    logger = setup_logging(log_file, args.verbose)
    cleanup_old_logs(log_file.parent, config.logging.keep_logs)

    if front_end is None:
        front_end = ConsoleFrontEnd(bar_length=config.progress.bar_length)
    organizer = SeasonOrganizer(config.organizer, logger)

    try:
        front_end.clear_screen()
        series_name = front_end.ask_series_name()
        seasons = front_end.ask_seasons()
        base_dir = front_end.ask_directory(series_name)

        result = organizer.organize(series_name, seasons, base_dir, front_end)
        organizer.print_summary(result)
        logger.debug(f"Log File: {log_file}")

        print(f"\n{Colors.GREEN}✓ Organization completed successfully!{Colors.RESET}")
        return 0

    except (KeyboardInterrupt, EOFError):
        print(f"\n{Colors.YELLOW}Operation cancelled by user.{Colors.RESET}")
        return 1
    except OrganizerError as e:
        print()
        logger.error(str(e))
        print(f"\n{Colors.RED}Fatal error: {e}{Colors.RESET}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
