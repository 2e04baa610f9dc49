import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LANGUAGE_PAIR = "ja|en"
DEFAULT_PLACEHOLDER = "`"
DEFAULT_FIELD_SEPARATOR = ":"
MAP_SPLIT_CHAR = ":"

MODE_BATCHED = "batched"
MODE_TOKENS = "tokens"
MODES = (MODE_BATCHED, MODE_TOKENS)

# Particles that title-casing would capitalize in romanized output
DEFAULT_PARTICLES: Tuple[str, ...] = ("wa", "ga", "no", "ni", "wo", "de", "to", "mo", "he", "ka", "ya", "yo", "ne")


@dataclass(frozen=True)
class ConverterConfig:
    """
    Settings for one conversion call. Passed explicitly; never global.
    """
    language_pair: str = DEFAULT_LANGUAGE_PAIR
    substitutions: Tuple[Tuple[str, str], ...] = ()  # (regex pattern, replacement), applied in order
    particles: Tuple[str, ...] = DEFAULT_PARTICLES
    placeholder: str = DEFAULT_PLACEHOLDER
    field_separator: str = DEFAULT_FIELD_SEPARATOR
    mode: str = MODE_BATCHED

    def __post_init__(self):
        if len(self.placeholder) != 1:
            raise ValueError(f"placeholder must be a single character, got {self.placeholder!r}")
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode {self.mode!r}, expected one of {MODES}")
        object.__setattr__(self, "substitutions", tuple(valid_substitutions(self.substitutions)))


def valid_substitutions(pairs: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
    """
    Keeps the (pattern, replacement) pairs whose pattern compiles; the rest
    are dropped with a warning.
    """
    result: List[Tuple[str, str]] = []
    for pattern, replacement in pairs or ():
        try:
            re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            logger.warning(f"Ignoring substitution with invalid pattern {pattern!r}: {e}")
            continue
        result.append((pattern, replacement))
    return result


def parse_substitutions(maps: Iterable[str]) -> List[Tuple[str, str]]:
    """
    Parses "pattern:replacement" strings. Entries that do not split into
    exactly two parts, or whose pattern is not a valid regex, are skipped.
    """
    result: List[Tuple[str, str]] = []
    for entry in maps or []:
        parts = entry.split(MAP_SPLIT_CHAR)
        if len(parts) != 2:
            logger.warning(f"Ignoring malformed substitution {entry!r} (expected 'pattern{MAP_SPLIT_CHAR}replacement')")
            continue
        result.append((parts[0], parts[1]))
    return valid_substitutions(result)
