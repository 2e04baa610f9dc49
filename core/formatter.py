"""
Per-token translation dispatch and output formatting.

1. Latin - passed through untouched
2. Katakana - translated to the target language
3. Hiragana / Kanji - transliterated phonetically
"""
import html
import re
from typing import Callable, Iterable, Tuple

from core.config.converter_config import ConverterConfig
from core.logger import get_logger
from core.text_token import ScriptClass, TextToken, segment

logger = get_logger(__name__)

# (text, language_pair) -> str; raises TranslationUnavailable
TranslateFn = Callable[[str, str], str]


def title_case(text: str) -> str:
    """
    Capitalizes the first letter of every whitespace-delimited word and
    lowercases the rest. All-caps words are left alone as acronyms.
    """
    def _word(match):
        word = match.group(0)
        if word.isupper():
            return word
        lowered = word.lower()
        for i, ch in enumerate(lowered):
            if ch.isalpha():
                return lowered[:i] + ch.upper() + lowered[i + 1:]
        return lowered

    return re.sub(r"\S+", _word, text)


def apply_substitutions(text: str, substitutions: Iterable[Tuple[str, str]]) -> str:
    for pattern, replacement in substitutions:
        text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
    return text


def restore_particles(text: str, particles: Iterable[str]) -> str:
    for particle in particles:
        if not particle:
            continue
        text = re.sub(r"\b" + re.escape(particle) + r"\b",
                      lambda _m, p=particle: p, text, flags=re.IGNORECASE)
    return text


def finish_phonetic(text: str, config: ConverterConfig) -> str:
    """Substitutions, then title-casing, then lowercase particles."""
    out = apply_substitutions(text, config.substitutions)
    out = title_case(out)
    return restore_particles(out, config.particles)


def format_token(token: TextToken, config: ConverterConfig,
                 translate_fn: TranslateFn, transliterate_fn: TranslateFn) -> str:
    if token.script == ScriptClass.KANA_KANJI:
        phonetic = html.unescape(transliterate_fn(token.text, config.language_pair))
        logger.debug(f"Transliterated {token.text!r} -> {phonetic!r}")
        return token.prefix + finish_phonetic(phonetic, config).strip()

    if token.script == ScriptClass.KATAKANA:
        translated = html.unescape(translate_fn(token.text, config.language_pair))
        logger.debug(f"Translated {token.text!r} -> {translated!r}")
        return token.prefix + title_case(translated).strip()

    return token.prefix + token.text


def format_string(text: str, config: ConverterConfig,
                  translate_fn: TranslateFn, transliterate_fn: TranslateFn) -> str:
    return "".join(
        format_token(token, config, translate_fn, transliterate_fn)
        for token in segment(text)
    )
