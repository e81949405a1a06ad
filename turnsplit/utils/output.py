"""
Turn Output Helpers for the turnsplit CLI

This module renders segmented turns for the terminal and exports them to
CSV or plain records for JSON.

Functions:
    - turns_to_records: Converts turns into plain dictionaries.
    - save_turns_to_csv: Saves turns to a CSV file.
    - color_txt: Colorizes a string.
    - print_turns: Prints turns, optionally with a score breakdown.
"""

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from colored import attr, bg, fg
from halo import Halo

from turnsplit.config import get_settings
from turnsplit.domain import ClassificationResult, Turn
from turnsplit.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

KIND_COLORS: dict[str, tuple[str, str]] = {
    "primary": ("black", "green"),
    "counterpart": ("black", "blue"),
    "unknown": ("black", "yellow"),
}


def turns_to_records(turns: Sequence[Turn]) -> list[dict[str, str]]:
    """
    Converts turns into plain dictionaries.

    Arguments:
        turns (Sequence[Turn]): Segmented turns.

    Returns:
        list[dict[str, str]]: One record per turn, in order.
    """
    return [
        {
            "kind": turn.kind,
            "speaker": turn.display_name,
            "content": turn.content,
            "label_prefix": turn.label_prefix,
        }
        for turn in turns
    ]


def save_turns_to_csv(turns: Sequence[Turn], file_name: str) -> str:
    """
    Saves turns to a CSV file in the configured output folder.

    Arguments:
        turns (Sequence[Turn]): The turns to be saved.
        file_name (str): Name of the source file; its stem names the CSV.

    Returns:
        str: The path to the saved CSV file.
    """
    logger.info("Starting to save turns to CSV.")
    folder: Path = get_settings().output.folder
    folder.mkdir(parents=True, exist_ok=True)
    stem: str = Path(file_name).stem
    if not stem or stem == "-":
        stem = "stdin"
    csv_path: Path = folder / f"{stem}.csv"

    with Halo(
        text=f"Saving turns to {csv_path}",
        spinner="dots",
        text_color="green",
    ):
        with open(csv_path, mode="w", newline="", encoding="utf-8") as file:
            writer = csv.writer(file)
            writer.writerow(["Index", "Kind", "Speaker", "Content"])
            for index, turn in enumerate(turns):
                writer.writerow([index, turn.kind, turn.display_name, turn.content])
                logger.debug("Written row %d for %s.", index, turn.display_name)

    logger.info("Turns successfully saved to %s", csv_path)
    return str(csv_path)


def color_txt(string: str, fg_color: str, bg_color: str, padding: int = 0) -> str:
    """
    Colorizes a string.

    Arguments:
        string (str): String to be colorized.
        fg_color (str): Foreground color.
        bg_color (str): Background color.
        padding (int): Minimum width, padded on the right.

    Returns:
        str: Colorized string.
    """
    if padding:
        string = string.ljust(padding)

    return f"{fg(fg_color)}{bg(bg_color)}{string}{attr('reset')}"


def print_turns(
    turns: Sequence[Turn],
    breakdowns: Sequence[ClassificationResult] | None = None,
    *,
    estimated: bool = False,
) -> None:
    """
    Prints each turn under a coloured speaker header.

    Arguments:
        turns (Sequence[Turn]): Turns to print.
        breakdowns (Sequence[ClassificationResult] | None): Optional
            per-turn classifications printed beneath each turn.
        estimated (bool): Marks the breakdowns as content-only estimates
            rather than the verdicts that attributed the turns.
    """
    # Deferred: the classifier package imports turnsplit.utils.
    from turnsplit.classifier.explain import heat_score

    logger.info("Printing %d turns.", len(turns))
    width: int = max((len(turn.display_name) for turn in turns), default=0) + 2
    for index, turn in enumerate(turns):
        fg_color, bg_color = KIND_COLORS.get(turn.kind, KIND_COLORS["unknown"])
        print(color_txt(f" {turn.display_name}", fg_color, bg_color, width))
        print(turn.content)
        if breakdowns is not None and index < len(breakdowns):
            result = breakdowns[index]
            print(
                f"  -> {result.speaker} ({result.confidence:.2f})"
                + (f" corrected by {result.corrected_by}" if result.corrected_by else "")
                + (" [content-only estimate]" if estimated else "")
            )
            for item in heat_score(result):
                print(f"     {item.weight:>3}  {item.feature:<20} {item.description}")
        print()
