from .input import InputTooLargeError, read_transcript
from .logger import configure_logging, get_logger
from .output import print_turns, save_turns_to_csv, turns_to_records

__all__ = [
    "InputTooLargeError",
    "configure_logging",
    "get_logger",
    "print_turns",
    "read_transcript",
    "save_turns_to_csv",
    "turns_to_records",
]
