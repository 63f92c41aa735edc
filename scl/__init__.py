"""Reading and writing files in the Scala scale format (.scl).

See http://www.huygens-fokker.org/scala/scl_format.html for the format.

File Layout:
- Lines starting with '!' are comments and may appear anywhere
- First non-comment line: free-text description (may be empty)
- Second non-comment line: number of pitches
- Then one pitch per line: '<int>', '<int>/<int>' or a decimal number of cents

Reading:
- read() consumes any iterable of text or byte lines until exhausted
- The first malformed entry aborts the read with its 1-based line number
- A pitch count different from the declared one is an error

Writing:
- write() emits an optional '! <name>' header, the description, the count
  and one rendered pitch per line, each count/pitch line indented by a space

Corpus Support:
- read_file()/write_file() for paths on disk
- validate_corpus() reads every .scl file of a directory and collects failures
"""

import enum
import io
import logging
import math
import os
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

import consts
from pitch import CentsPitch, Pitch, RatioPitch

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r'^[+-]?\d+$', re.ASCII)
_CENTS_PATTERN = re.compile(r'^[+-]?(?:\d+\.\d*|\.\d+)(?:[eE][+-]?\d+)?$', re.ASCII)


# --- Errors ---

class SclError(ValueError):
    """Base class for malformed .scl input."""


class MalformedCountError(SclError):
    """The pitch count line is not a non-negative integer."""

    def __init__(self, text: str, line: Optional[int] = None):
        self.text = text
        self.line = line
        msg = f"malformed number of pitches: '{text}'"
        if line is not None:
            msg = f"line {line}: {msg}"
        super().__init__(msg)


class PitchError(SclError):
    """A pitch entry could not be parsed."""

    kind = "pitch"

    def __init__(self, text: str, line: Optional[int] = None):
        self.text = text
        self.line = line
        msg = f"malformed {self.kind}: '{text}'"
        if line is not None:
            msg = f"line {line}: {msg}"
        super().__init__(msg)

    def at_line(self, line: int) -> "PitchError":
        """Return a copy of this error located at the given line."""
        return type(self)(self.text, line)


class MalformedRatioError(PitchError):
    kind = "pitch ratio"


class MalformedCentsError(PitchError):
    kind = "cents value"


class PitchCountMismatchError(SclError):
    """The number of pitch lines differs from the declared count."""

    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(f"read {actual} pitches but expected {expected}")


class EmptyDescriptionError(SclError):
    """A corpus file parsed but carries no description."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name}: 0 length description")


# --- Data model ---

@dataclass(frozen=True)
class Scale:
    """A sequence of pitches that can be applied relative to a base frequency."""
    description: str = ""
    pitches: Tuple[Pitch, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "pitches", tuple(self.pitches))

    def freqs(self, base: float) -> List[float]:
        """Return one octave of frequencies, starting at and including base."""
        return [float(base)] + [p.freq(base) for p in self.pitches]


class _State(enum.Enum):
    AWAITING_DESCRIPTION = 1
    AWAITING_COUNT = 2
    READING_PITCHES = 3


# --- Parsing ---

def _parse_int64(text: str) -> Optional[int]:
    """Parse a base-10 integer, None if malformed or outside int64."""
    if not _INT_PATTERN.match(text):
        return None
    value = int(text)
    if abs(value) > consts.INT64_MAX:
        return None
    return value


def parse_pitch(text: str) -> Pitch:
    """Parse one pitch entry.

    Only the first whitespace-delimited token is considered, so trailing
    annotations are ignored. A token with a decimal point is cents, anything
    else is a ratio 'N' or 'N/D' with N and D positive.

    Raises:
        MalformedCentsError: the token has a '.' but is not a number
        MalformedRatioError: the ratio is malformed or not positive
    """
    fields = text.split()
    if not fields:
        raise MalformedRatioError(text)
    token = fields[0]

    if '.' in token:
        if not _CENTS_PATTERN.match(token):
            raise MalformedCentsError(token)
        value = float(token)
        if math.isinf(value):
            raise MalformedCentsError(token)
        return CentsPitch(value)

    parts = token.split('/')
    if len(parts) not in (1, 2):
        raise MalformedRatioError(token)
    numbers = [_parse_int64(p) for p in parts]
    if any(v is None for v in numbers):
        raise MalformedRatioError(token)
    n = numbers[0]
    d = numbers[1] if len(numbers) == 2 else 1
    if n <= 0 or d <= 0:
        raise MalformedRatioError(token)
    return RatioPitch(n, d)


def _iter_lines(stream: Iterable[Union[str, bytes]], encoding: str):
    for raw in stream:
        if isinstance(raw, bytes):
            raw = raw.decode(encoding, errors='replace')
        if raw.endswith('\n'):
            raw = raw[:-1]
        if raw.endswith('\r'):
            raw = raw[:-1]
        yield raw


def read(stream: Iterable[Union[str, bytes]], encoding: str = consts.DEFAULT_ENCODING) -> Scale:
    """Read a Scale from the given stream.

    The input is assumed to be in .scl format and is consumed until exhausted.
    Text and binary file objects are accepted, as is any iterable of lines.
    Errors raised while reading the stream propagate unchanged.

    Raises:
        TypeError: stream is a str or bytes object rather than a stream of lines
    """
    if isinstance(stream, (str, bytes, bytearray)):
        raise TypeError("read() expects a stream of lines, use loads() to parse a string")

    state = _State.AWAITING_DESCRIPTION
    description = ""
    expected = 0
    pitches: List[Pitch] = []

    for lineno, line in enumerate(_iter_lines(stream, encoding), start=1):
        if line.startswith(consts.COMMENT_PREFIX):
            continue
        if state is _State.AWAITING_DESCRIPTION:
            description = line
            state = _State.AWAITING_COUNT
        elif state is _State.AWAITING_COUNT:
            text = line.strip()
            count = _parse_int64(text)
            if count is None or count < 0:
                raise MalformedCountError(text, lineno)
            expected = count
            state = _State.READING_PITCHES
        elif line.strip():
            try:
                pitches.append(parse_pitch(line))
            except PitchError as e:
                raise e.at_line(lineno) from None

    if state is not _State.READING_PITCHES:
        raise MalformedCountError("")
    if len(pitches) != expected:
        raise PitchCountMismatchError(len(pitches), expected)

    logger.debug("Read scale %r with %d pitches", description, len(pitches))
    return Scale(description, pitches)


def loads(text: str) -> Scale:
    """Read a Scale from a string."""
    return read(io.StringIO(text))


# --- Serialization ---

def _is_binary(stream) -> bool:
    return isinstance(stream, (io.RawIOBase, io.BufferedIOBase))


def write(stream, scale: Scale, name: str = "", encoding: str = consts.DEFAULT_ENCODING) -> None:
    """Write a scale to the given stream in .scl format.

    If name is non-empty it is written in a comment at the beginning of the
    output, as is customary in .scl files. Errors raised by the stream abort
    the write and propagate unchanged.
    """
    binary = _is_binary(stream)

    def emit(text: str) -> None:
        stream.write(text.encode(encoding) if binary else text)

    if name:
        emit(f"{consts.COMMENT_PREFIX} {name}\n{consts.COMMENT_PREFIX}\n")
    emit(f"{scale.description}\n")
    emit(f" {len(scale.pitches)}\n")
    for p in scale.pitches:
        emit(f" {p.render()}\n")


def dumps(scale: Scale, name: str = "") -> str:
    """Serialize a Scale to a string."""
    buf = io.StringIO()
    write(buf, scale, name)
    return buf.getvalue()


# --- Files and corpora ---

def read_file(path: str, encoding: str = consts.DEFAULT_ENCODING) -> Scale:
    """Read a .scl file from disk."""
    with open(path, "rb") as f:
        return read(f, encoding)


def write_file(path: str, scale: Scale, name: Optional[str] = None,
               encoding: str = consts.DEFAULT_ENCODING) -> None:
    """Write a .scl file; the header name defaults to the file's base name."""
    if name is None:
        name = os.path.basename(path)
    with open(path, "wb") as f:
        write(f, scale, name, encoding)
    logger.info("Wrote %d pitches to %s", len(scale.pitches), path)


@dataclass
class CorpusReport:
    """Outcome of reading every .scl file in a directory."""
    directory: str
    scales: List[Tuple[str, Scale]] = field(default_factory=list)
    failures: List[Tuple[str, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.scales) + len(self.failures)


def validate_corpus(dir_path: str, encoding: str = consts.DEFAULT_ENCODING) -> CorpusReport:
    """Read all .scl files of a directory, recording per-file failures.

    Raises:
        FileNotFoundError: dir_path is not a directory
    """
    if not os.path.isdir(dir_path):
        raise FileNotFoundError(f"Corpus directory not found: {dir_path}")

    report = CorpusReport(dir_path)
    for fn in sorted(os.listdir(dir_path)):
        if not fn.lower().endswith(consts.SCL_EXTENSION):
            continue
        fp = os.path.join(dir_path, fn)
        if not os.path.isfile(fp):
            continue
        try:
            scale = read_file(fp, encoding)
            if not scale.description:
                raise EmptyDescriptionError(fn)
        except (SclError, OSError) as e:
            logger.warning("Couldn't read %s: %s", fn, e)
            report.failures.append((fn, e))
            continue
        report.scales.append((fn, scale))

    logger.info("Validated %d files in %s, %d failures", report.total, dir_path, len(report.failures))
    return report

