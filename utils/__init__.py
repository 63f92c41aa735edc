"""Core utilities shared by the SCL reader/writer and its command line tool.

Mathematical Operations:
- Ratio-to-cents and cents-to-ratio conversions
- Fractions accepted wherever a ratio is expected

Logging:
- Root logger configuration with a file handler and optional console output
- Redirection of the warnings module into the logging system

Command Line Support:
- argparse value parsers with descriptive error messages

Table and Export Support:
- Aligned plain-text table formatting
- Export success/failure reporting
- Lazy openpyxl import and worksheet header formatting

This module is the foundation layer that the other packages depend on.
"""

import argparse
import logging
import math
import warnings
from fractions import Fraction
from typing import List, Optional

import consts

# --- Logging system ---

def setup_logging(log_file: Optional[str] = consts.DEFAULT_LOG_FILE, verbose: bool = False) -> None:
    """Setup the logging system and capture warnings into it.

    Args:
        log_file: Path of the log file; None disables file logging
        verbose: Also log to the console, DEBUG records included

    The log file receives INFO and above; with verbose it receives DEBUG too.
    """
    handlers: List[logging.Handler] = []
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    if verbose:
        handlers.append(logging.StreamHandler())
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=consts.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Capture warnings and redirect to logger
    def warning_handler(message, category, filename, lineno, file=None, line=None):
        logger = logging.getLogger('warnings')
        logger.warning(f"{category.__name__}: {message} ({filename}:{lineno})")

    warnings.showwarning = warning_handler

# --- Mathematical utilities ---

def ratio_to_cents(ratio: consts.Numeric) -> float:
    """Convert ratio to cents using logarithmic formula."""
    if isinstance(ratio, Fraction):
        # Logs taken separately so int64 terms keep their precision
        return consts.CENTS_PER_OCTAVE * (math.log2(ratio.numerator) - math.log2(ratio.denominator))
    return consts.CENTS_PER_OCTAVE * math.log2(float(ratio))


def cents_to_ratio(cents: float) -> float:
    """Convert cents to a frequency ratio (1200 cents = 2/1)."""
    return 2.0 ** (float(cents) / consts.CENTS_PER_OCTAVE)


def apply_cents(freq_hz: float, cents: float) -> float:
    """Apply cents offset to a frequency."""
    return float(freq_hz) * cents_to_ratio(cents)


def apply_ratio(freq_hz: float, numerator: int, denominator: int) -> float:
    """Scale a frequency by the rational N/D."""
    return float(freq_hz) * numerator / denominator

# --- argparse value parsers ---

def positive_frequency(value: str) -> float:
    """Parser for a strictly positive, finite frequency in Hz."""
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid frequency.")
    if not math.isfinite(f) or f <= 0:
        raise argparse.ArgumentTypeError(f"Frequency must be positive and finite: '{value}'")
    return f


def non_empty_string(value: str) -> str:
    """Parser for a string argument that must not be blank."""
    s = str(value).strip()
    if not s:
        raise argparse.ArgumentTypeError("Value must not be empty")
    return s

# --- Table formatting ---

def format_aligned_table(headers: List[str], rows: List[List[str]]) -> List[str]:
    """Format a table with aligned columns.

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of strings

    Returns:
        List of formatted lines ready for printing
    """
    if not headers:
        return []

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for col_idx, cell in enumerate(row):
            if col_idx < len(widths) and len(cell) > widths[col_idx]:
                widths[col_idx] = len(cell)

    def format_row(row_data):
        return "  ".join(str(row_data[i]).ljust(widths[i])
                         for i in range(min(len(row_data), len(widths)))).rstrip()

    lines = [format_row(headers)]
    for row in rows:
        lines.append(format_row(row))

    return lines


# --- File export utilities ---

def log_export_success(file_path: str) -> None:
    """Log successful file export."""
    logging.getLogger(__name__).info("Exported %s", file_path)
    print(f"Exported: {file_path}")


def log_export_error(file_path: str, error: Exception) -> None:
    """Log file export error."""
    logging.getLogger(__name__).error("Write error %s: %s", file_path, error)
    print(f"Write error {file_path}: {error}")


def lazy_import_openpyxl():
    """Lazy import openpyxl with error handling."""
    try:
        import importlib
        openpyxl = importlib.import_module('openpyxl')
        styles = importlib.import_module('openpyxl.styles')
        return openpyxl, styles
    except (ImportError, AttributeError):
        return None, None


def get_standard_system_headers() -> List[str]:
    """Get standard scale table headers."""
    return ["Step", "Pitch", "Cents", "Hz"]


def setup_excel_worksheet_formatting(ws, headers: List[str]) -> None:
    """Setup Excel worksheet with standard formatting."""
    _, styles = lazy_import_openpyxl()
    ws.append(headers)
    if styles is None:
        return

    header_font = styles.Font(bold=True)
    header_fill = styles.PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill
