import logging
import sys

from colorama import Fore, Style, init

from .models import RunReport


def setup_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",  # Handled by ConsoleManager
        handlers=[logging.StreamHandler(sys.stderr)],
    )


class ConsoleManager:
    """Manages console output, respecting quiet/verbose/color flags."""

    def __init__(self, level: int, no_color: bool):
        self.level = level
        self.no_color = no_color
        self._logger = logging.getLogger("typestats")
        if not no_color:
            init(autoreset=True)

    def _log(self, msg: str, log_level: int, color: str = "") -> None:
        if log_level < self.level:
            return

        if not self.no_color and color:
            msg = f"{color}{msg}{Style.RESET_ALL}"

        self._logger.log(log_level, msg)

    def debug(self, msg: str) -> None:
        self._log(msg, logging.DEBUG, Style.DIM)

    def info(self, msg: str) -> None:
        self._log(msg, logging.INFO)

    def warning(self, msg: str) -> None:
        self._log(msg, logging.WARNING, Fore.YELLOW)

    def error(self, msg: str) -> None:
        self._log(msg, logging.ERROR, Fore.RED)

    def critical(self, msg: str) -> None:
        self._log(msg, logging.CRITICAL, Fore.RED + Style.BRIGHT)

    def print_summary(self, report: RunReport) -> None:
        """Print the final counts table."""
        if self.level > logging.INFO:
            return

        print("\n--- Type Statistics Summary ---", file=sys.stderr)

        def color_val(val: int, color_if_nonzero: str) -> str:
            if val > 0 and not self.no_color:
                return f"{color_if_nonzero}{val}{Style.RESET_ALL}"
            return str(val)

        src = report.source
        summary_data = [
            ("Source", src.kind, ""),
            ("Types Found", src.types_found, ""),
            ("Types Processed", report.types_processed, Fore.GREEN),
            ("Names Skipped", len(src.skipped), Style.DIM),
            ("Names Unresolved", len(src.unresolved), Fore.YELLOW),
        ]

        max_label = max(len(label) for label, _, _ in summary_data)

        for label, value, color in summary_data:
            val_str = color_val(value, color) if isinstance(value, int) else value
            print(f"{label:<{max_label}} : {val_str}", file=sys.stderr)

        print("-------------------------------", file=sys.stderr)
