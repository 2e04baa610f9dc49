import html
import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from core.char_map import is_ascii, map_chars, restore
from core.config.converter_config import MODE_TOKENS, ConverterConfig
from core.errors import ConverterError
from core.formatter import TranslateFn, finish_phonetic, format_string
from core.logger import get_logger
from core.tags import MediaTags, TagStore

logger = get_logger(__name__)


class ConversionEvent(str, Enum):
    CONVERTED = "converted"
    FAILED = "failed"
    COMPLETED = "completed"


@dataclass(frozen=True)
class ConversionOutcome:
    event: ConversionEvent
    old_name: Optional[str] = None
    new_name: Optional[str] = None
    error: Optional[str] = None


def translate_field(text: Optional[str], config: ConverterConfig, transliterate_fn: TranslateFn) -> str:
    """
    Translates a whole field in one backend call. ASCII characters are
    swapped for placeholders on the way out and put back on the way in, so
    the backend cannot alter the Latin parts. Substitutions, title-casing and
    particles are applied while the Latin parts are still placeholders.
    """
    if text is None:
        return ""
    if is_ascii(text):
        return text

    char_map = map_chars(text, config.placeholder)
    raw = transliterate_fn(char_map.mapped_text, config.language_pair)
    out = finish_phonetic(html.unescape(raw), config)
    return restore(out, char_map.chars, config.placeholder).strip()


def translate_values(values: List[str], config: ConverterConfig,
                     translate_fn: TranslateFn, transliterate_fn: TranslateFn) -> List[str]:
    """Translates a multi-valued field (performers, album artists)."""
    if not values:
        return []

    if config.mode == MODE_TOKENS:
        return [format_string(v, config, translate_fn, transliterate_fn).strip() for v in values]

    joined = config.field_separator.join(values)
    translated = translate_field(joined, config, transliterate_fn)
    return [item.strip() for item in translated.split(config.field_separator)]


def translate_text(text: Optional[str], config: ConverterConfig,
                   translate_fn: TranslateFn, transliterate_fn: TranslateFn) -> str:
    if config.mode == MODE_TOKENS:
        return format_string(text or "", config, translate_fn, transliterate_fn).strip()
    return translate_field(text, config, transliterate_fn).strip()


def _safe_file_stem(stem: str) -> str:
    for sep in {os.sep, "/", "\\"}:
        stem = stem.replace(sep, "-")
    return stem


class FileConverter:
    """
    Renames files and rewrites their tags, one file at a time.

    convert() yields one outcome per file followed by a final COMPLETED
    outcome. A failure on one file is reported and the loop moves on.
    """

    def __init__(self, files: List[str], config: ConverterConfig,
                 translate_fn: TranslateFn, transliterate_fn: TranslateFn,
                 tag_store: Optional[TagStore] = None, dry_run: bool = False):
        self.files = list(files)
        self.config = config
        self.translate_fn = translate_fn
        self.transliterate_fn = transliterate_fn
        self.tag_store = tag_store
        self.dry_run = dry_run

    def convert(self) -> Iterator[ConversionOutcome]:
        for file_path in self.files:
            yield self.convert_file(file_path)
        yield ConversionOutcome(ConversionEvent.COMPLETED)

    def convert_file(self, file_path: str) -> ConversionOutcome:
        file_name = os.path.basename(file_path)
        if not os.path.isfile(file_path):
            logger.warning(f"Skipping missing file: {file_path}")
            return ConversionOutcome(ConversionEvent.FAILED, old_name=file_name, error="File not found")

        try:
            new_name = self._convert(file_path)
        except (ConverterError, OSError) as e:
            logger.error(f"Failed to convert {file_path}: {e}")
            return ConversionOutcome(ConversionEvent.FAILED, old_name=file_name, error=str(e))

        logger.info(f"Converted: {file_name} -> {new_name}")
        return ConversionOutcome(ConversionEvent.CONVERTED, old_name=file_name, new_name=new_name)

    def translate_tags(self, tags: MediaTags) -> MediaTags:
        return MediaTags(
            title=self._text(tags.title),
            performers=self._values(tags.performers),
            album_artists=self._values(tags.album_artists),
            album=self._text(tags.album),
        )

    def _convert(self, file_path: str) -> str:
        directory = os.path.dirname(file_path)
        stem, extension = os.path.splitext(os.path.basename(file_path))

        new_stem = _safe_file_stem(self._text(stem)) or stem
        new_name = new_stem + extension
        new_path = os.path.join(directory, new_name)
        rename = new_path != file_path and not self.dry_run

        # Nothing is written until the rename is known to be possible
        if rename and os.path.exists(new_path):
            raise FileExistsError(f"Target already exists: {new_path}")

        if self.tag_store is not None:
            tags = self.translate_tags(self.tag_store.load(file_path))
            if not self.dry_run:
                self.tag_store.save(file_path, tags)

        if rename:
            os.rename(file_path, new_path)
        return new_name

    def _text(self, text: Optional[str]) -> str:
        return translate_text(text, self.config, self.translate_fn, self.transliterate_fn)

    def _values(self, values: List[str]) -> List[str]:
        return translate_values(values, self.config, self.translate_fn, self.transliterate_fn)
