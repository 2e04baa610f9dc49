from dataclasses import dataclass, field
from typing import List, Tuple

from core.config.converter_config import DEFAULT_PLACEHOLDER
from core.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CharacterMap:
    mapped_text: str
    chars: List[str] = field(default_factory=list)  # protected characters, in text order
    original_length: int = 0
    placeholder: str = DEFAULT_PLACEHOLDER


def is_ascii(text: str) -> bool:
    return all(ord(ch) < 128 for ch in text or "")


def map_chars(text: str, placeholder: str = DEFAULT_PLACEHOLDER) -> CharacterMap:
    """
    Replaces every ASCII character with the placeholder, recording the
    originals in order. A placeholder already present in the text is recorded
    too, so that every placeholder in the result has exactly one entry.
    """
    if len(placeholder) != 1:
        raise ValueError(f"Placeholder must be a single character, got {placeholder!r}")

    s = text or ""
    chars: List[str] = []
    out: List[str] = []
    for ch in s:
        if ord(ch) < 128:
            chars.append(ch)
            out.append(placeholder)
        elif ch == placeholder:
            chars.append(ch)
            out.append(ch)
        else:
            out.append(ch)

    return CharacterMap(mapped_text="".join(out), chars=chars,
                        original_length=len(s), placeholder=placeholder)


def protect(text: str, placeholder: str = DEFAULT_PLACEHOLDER) -> Tuple[str, List[str]]:
    char_map = map_chars(text, placeholder)
    return char_map.mapped_text, list(char_map.chars)


def restore(mapped_text: str, recovery: List[str], placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """
    Puts recorded characters back, consuming one entry per placeholder in
    order. Restoration is best-effort: a mismatch between the placeholder count
    and the recovery list is logged, never raised.
    """
    s = mapped_text or ""
    out: List[str] = []
    idx = 0
    surplus = 0
    for ch in s:
        if ch != placeholder:
            out.append(ch)
        elif idx < len(recovery):
            out.append(recovery[idx])
            idx += 1
        else:
            surplus += 1
            out.append(ch)

    if idx < len(recovery):
        logger.warning(
            f"Restore under-count: {len(recovery) - idx} of {len(recovery)} protected characters dropped"
        )
    if surplus:
        logger.warning(f"Restore over-count: {surplus} placeholder(s) left without a recorded character")

    return "".join(out)
