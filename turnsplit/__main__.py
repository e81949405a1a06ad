"""
turnsplit

Command-line entry point for splitting a pasted two-party chat transcript
into attributed turns.

Usage:
    turnsplit conversation.txt
    turnsplit - --format json < conversation.txt
    turnsplit conversation.txt --explain --no-classifier

License: MIT
"""

import argparse
import json
import logging
import sys
import time
from dataclasses import replace

from dotenv import load_dotenv

from turnsplit.config import reload_settings
from turnsplit.parsing import SegmentationPipeline, detect_source, detect_title
from turnsplit.parsing.pipeline import CLASSIFIER
from turnsplit.utils import (
    InputTooLargeError,
    configure_logging,
    get_logger,
    print_turns,
    read_transcript,
    save_turns_to_csv,
    turns_to_records,
)

logger: logging.Logger = get_logger("turnsplit")

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json", "csv")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split a chat transcript into attributed speaker turns"
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Path to the transcript text file, or - to read stdin",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format for the segmented turns",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Write JSON output to this path instead of stdout",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print the per-feature score breakdown for every turn",
    )
    parser.add_argument(
        "--no-classifier",
        action="store_true",
        help="Skip content-based classification and use label/alternation only",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (overrides LOG_LEVEL)",
    )
    return parser


def main() -> None:
    """
    Main function to handle the command line interface logic.
    """
    args: argparse.Namespace = _build_parser().parse_args()
    load_dotenv()
    configure_logging(args.log_level)
    settings = reload_settings()

    if not args.file:
        logger.error("No transcript file provided.")
        sys.exit(1)

    try:
        text: str = read_transcript(args.file, max_bytes=settings.output.max_input_bytes)
    except FileNotFoundError:
        logger.error("Transcript file not found: %s", args.file)
        sys.exit(1)
    except InputTooLargeError as err:
        logger.error("%s", err)
        sys.exit(1)

    if args.no_classifier:
        settings = replace(
            settings, pipeline=replace(settings.pipeline, use_classifier=False)
        )

    start_time: float = time.time()
    pipeline = SegmentationPipeline.from_settings(settings)
    turns, strategy = pipeline.segment_with_strategy(text)
    logger.info(
        "Segmented %d turns with %s in %.3f seconds",
        len(turns),
        strategy,
        time.time() - start_time,
    )

    if args.format == "json":
        payload = {
            "source": detect_source(turns),
            "title": detect_title(text, turns),
            "turns": turns_to_records(turns),
        }
        rendered = json.dumps(payload, indent=2, ensure_ascii=False)
        if args.output:
            with open(args.output, "w", encoding="utf-8") as handle:
                handle.write(rendered + "\n")
            logger.info("Turns written to %s", args.output)
        else:
            print(rendered)
        return

    if args.format == "csv":
        csv_path = save_turns_to_csv(turns, args.file)
        logger.info("Turns saved to %s", csv_path)
        return

    breakdowns = None
    estimated = False
    if args.explain:
        if strategy == CLASSIFIER.name:
            # Same blocks in the same order, so this replays the accepted verdicts.
            breakdowns = pipeline.classifier.classify_conversation(
                [turn.content for turn in turns]
            )
        else:
            estimated = True
            breakdowns = [
                pipeline.classifier.classify(turn.label_prefix + turn.content)
                for turn in turns
            ]
    print(f"{detect_title(text, turns)} ({detect_source(turns)})\n")
    print_turns(turns, breakdowns, estimated=estimated)


if __name__ == "__main__":
    main()
