"""Constants and metadata for the SCL scale reader/writer.

This module centralizes the constants and configuration values shared by the
pitch model, the .scl codec, the frequency tables and the command line tool.

Program Metadata:
- Version information and authorship details

Mathematical Constants:
- Cents per octave for cents-to-ratio conversion
- Default frequency reference (A4 = 440 Hz)
- Signed 64-bit bound for ratio numerators and denominators

File Format:
- Comment prefix and file extension of Scala scale files
- Fixed-point precision used when rendering cents values
- Default text encoding for byte streams

Logging:
- Default log file name and record format
"""

from fractions import Fraction
from typing import Union

# Metadata
__program_name__ = "SCLT"
__version__ = "1.0.0"
__author__ = "SCLT contributors"
__date__ = "2026-10-16"
__license__ = "MIT"

# Constants
CENTS_PER_OCTAVE = 1200.0
DEFAULT_DIAPASON = 440.0
INT64_MAX = 2 ** 63 - 1

# Scala file format
COMMENT_PREFIX = "!"
SCL_EXTENSION = ".scl"
CENTS_DECIMALS = 6
DEFAULT_ENCODING = "utf-8"

# Logging
DEFAULT_LOG_FILE = "sclt.log"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1

# Type definitions
Numeric = Union[int, float, Fraction]
