"""
Logger utility for the Bandwidth Allocator.

Console logging with verbosity levels and an optional file mirror.
"""

from typing import Optional, TextIO
from datetime import datetime

# Prefix applied to every line of a message at that level
LEVEL_PREFIXES = {
    "error": "[ERROR] ",
    "warning": "[WARNING] ",
    "debug": "[DEBUG] ",
}


class AllocatorLogger:
    """
    Logger for allocation runs.

    Multi-line messages (trace blocks, tables) are prefixed line by line so
    a debug block stays recognizable in a mixed log. Use as a context
    manager to close the log file on exit.
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            verbose: Emit debug-level messages
            log_file: Optional file path that mirrors console output
        """
        self.verbose = verbose
        self.log_file = log_file
        self.file_handle: Optional[TextIO] = None

        if log_file:
            self.file_handle = open(log_file, 'w', encoding='utf-8')
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Allocation Log - {timestamp}\n{'='*60}\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log, possibly spanning several lines
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        prefix = LEVEL_PREFIXES.get(level, "")
        formatted = "\n".join(f"{prefix}{line}" if line else line for line in message.split("\n"))

        print(formatted)
        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def section(self, title: str) -> None:
        """Log a section header such as '--- Final Bandwidth Allocation Table ---'."""
        self.log(f"\n--- {title} ---")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __enter__(self) -> "AllocatorLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
