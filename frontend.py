#!/usr/bin/env python3
"""
Front-end collaborators for Season Organizer

FrontEnd is the silent interface the organizer reports to. ConsoleFrontEnd is the
interactive terminal version: it asks for the series name, the downloaded seasons
and the folder, draws the progress bar and waits for ENTER between phases.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from model import SeasonDirectory
from util import parse_season_list, parse_yes_no, validate_directory


class FrontEnd:
    """Receives progress from the organizer; every hook is a no-op here"""

    def on_bucket_start(self, season: SeasonDirectory) -> None:
        pass

    def on_progress(self, fraction: float) -> None:
        pass

    def on_bucket_done(self) -> None:
        pass

    def await_continue(self) -> None:
        pass


def render_progress(fraction: float, bar_length: int = 40) -> str:
    """
    Render a progress bar line

    Args:
        fraction: Completion between 0 and 1
        bar_length: Number of bar cells, below 1 renders the percentage only

    Returns:
        Line starting with a carriage return, e.g. '\\r████░░░░  50.00%'
    """
    fraction = min(max(fraction, 0.0), 1.0)
    if bar_length < 1:
        return f"\r{fraction * 100:.2f}%"
    filled = int(fraction * bar_length)
    return f"\r{'█' * filled}{'░' * (bar_length - filled)}  {fraction * 100:.2f}%"


class ConsoleFrontEnd(FrontEnd):
    """Interactive terminal front-end"""

    def __init__(self, bar_length: int = 40,
                 input_func: Callable[[str], str] = input,
                 output: Optional[TextIO] = None,
                 clear: bool = True):
        self.bar_length = bar_length
        self.input_func = input_func
        self.output = output or sys.stdout
        self.clear = clear

    def _print(self, text: str = "", end: str = "\n") -> None:
        self.output.write(text + end)
        self.output.flush()

    def _ask(self, prompt: str = "") -> str:
        return self.input_func(prompt).strip()

    def clear_screen(self) -> None:
        """Clear the terminal, falling back to blank lines if the command is unavailable"""
        if not self.clear:
            return
        command = ['cmd', '/c', 'cls'] if os.name == 'nt' else ['clear']
        try:
            subprocess.run(command, check=True)
        except (OSError, subprocess.CalledProcessError):
            self._print("\n" * 150, end="")

    def ask_series_name(self) -> str:
        """Ask until a non-blank series name is given"""
        while True:
            self._print("What is the series named?")
            answer = self._ask()
            self.clear_screen()
            if answer:
                return answer

    def ask_seasons(self) -> List[int]:
        """Ask for the downloaded seasons and have the operator confirm them"""
        while True:
            self._print(
                "Write the number of each season you have downloaded; separated "
                "by spaces or , (e.g.: '2,3,9 7 11')"
            )
            seasons = parse_season_list(self._ask())
            self.clear_screen()
            if seasons is None:
                continue

            self._print(" ".join(str(season) for season in seasons))
            self._print("\nAre those all the downloaded seasons? (Y/N)")
            prompt = ""
            while True:
                confirmed = parse_yes_no(self._ask(prompt))
                self.clear_screen()
                if confirmed is True:
                    return seasons
                if confirmed is False:
                    break
                prompt = "Invalid input. Try again (Y/N): "

    def ask_directory(self, series_name: str) -> Path:
        """Ask until an existing folder is given"""
        if os.sep == '\\':
            example = f"C:\\Users\\Your Name\\{series_name}"
        else:
            example = f"Users/Your Name/{series_name}"
        self._print(
            "Please put all episodes into one shared folder if they're not "
            f"already and enter the path to that folder (e.g.: '{example}'):"
        )
        while True:
            path, error = validate_directory(self._ask())
            self.clear_screen()
            if path is not None:
                return path
            self._print(error)
            self._print("Please enter the path again:")

    def on_bucket_start(self, season: SeasonDirectory) -> None:
        self._print(f"{season.name}:")

    def on_progress(self, fraction: float) -> None:
        self._print(render_progress(fraction, self.bar_length), end="")

    def on_bucket_done(self) -> None:
        self._print()

    def await_continue(self) -> None:
        self._print("\nPress ENTER to continue and rename all files")
        self.input_func("")
        self.clear_screen()
