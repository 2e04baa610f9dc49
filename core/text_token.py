import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import List


class ScriptClass(str, Enum):
    LATIN = "latin"
    KANA_KANJI = "kana_kanji"  # Hiragana or Kanji
    KATAKANA = "katakana"


@dataclass(frozen=True)
class TextToken:
    """
    A maximal run of characters sharing one script class.

    prefix is the separator emitted before the token's output text; it is
    decided once, when the token boundary is found.
    """
    script: ScriptClass
    text: str
    prefix: str = ""


def is_hiragana(ch: str) -> bool:
    return "\u3040" <= ch <= "\u309f"


def is_kanji(ch: str) -> bool:
    return (
        "\u4e00" <= ch <= "\u9fff"  # CJK Unified Ideographs
        or "\u3400" <= ch <= "\u4dbf"  # Extension A
        or ch == "\u3005"  # iteration mark
    )


def is_katakana(ch: str) -> bool:
    return (
        "\u30a0" <= ch <= "\u30ff"
        or "\u31f0" <= ch <= "\u31ff"  # phonetic extensions
        or "\uff66" <= ch <= "\uff9f"  # halfwidth
    )


def classify_char(ch: str) -> ScriptClass:
    if is_hiragana(ch) or is_kanji(ch):
        return ScriptClass.KANA_KANJI
    if is_katakana(ch):
        return ScriptClass.KATAKANA
    return ScriptClass.LATIN


def _is_punctuation(ch: str) -> bool:
    return unicodedata.category(ch).startswith("P")


def get_token_prefix(prev_type: ScriptClass, curr_type: ScriptClass,
                     prev_last_char: str, curr_first_char: str) -> str:
    """
    Separator to put in front of a new token, given the classes on both sides
    of the boundary and the two characters touching it.
    """
    if curr_type == ScriptClass.LATIN:
        if prev_type == ScriptClass.KANA_KANJI:
            if not (curr_first_char.isspace()
                    or _is_punctuation(curr_first_char)
                    or curr_first_char in "~-"):
                return " "
        elif prev_type == ScriptClass.KATAKANA:
            if not (curr_first_char.isspace() or _is_punctuation(curr_first_char)):
                return " "

    elif curr_type == ScriptClass.KANA_KANJI:
        if prev_type == ScriptClass.LATIN:
            if not (prev_last_char.isspace() or prev_last_char in "~-"):
                return " "
        elif prev_type == ScriptClass.KATAKANA:
            return " "

    elif curr_type == ScriptClass.KATAKANA:
        if prev_type == ScriptClass.LATIN:
            if not prev_last_char.isspace():
                return " "
        elif prev_type == ScriptClass.KANA_KANJI:
            return " "

    return ""


def segment(text: str) -> List[TextToken]:
    """
    Split text into sequential script-homogeneous tokens.

    e.g. "Cake 01. ヴァンパイア雪降る夜"
    => ["Cake 01. ", "ヴァンパイア", "雪降る夜"]
    """
    tokens: List[TextToken] = []
    if not text:
        return tokens

    curr_type = classify_char(text[0])
    buf: List[str] = [text[0]]
    prefix = ""

    for ch in text[1:]:
        ch_type = classify_char(ch)
        if ch_type == curr_type:
            buf.append(ch)
            continue

        tokens.append(TextToken(curr_type, "".join(buf), prefix))
        prefix = get_token_prefix(curr_type, ch_type, buf[-1], ch)
        curr_type = ch_type
        buf = [ch]

    tokens.append(TextToken(curr_type, "".join(buf), prefix))
    return tokens
