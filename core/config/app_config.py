import json

from PyQt6.QtCore import QSettings

from core.config.converter_config import (
    DEFAULT_LANGUAGE_PAIR,
    DEFAULT_PARTICLES,
    DEFAULT_PLACEHOLDER,
    MODE_BATCHED,
    ConverterConfig,
)


class AppConfig:
    """
    Persisted user settings.
    Wraps QSettings to provide type-safe access, and builds the ConverterConfig
    handed to each conversion.
    """
    def __init__(self):
        self.settings = QSettings("RomajiConverter", "Romaji_Converter")

    @property
    def language_pair(self) -> str:
        return self.settings.value("language_pair", DEFAULT_LANGUAGE_PAIR)

    @language_pair.setter
    def language_pair(self, value: str):
        self.settings.setValue("language_pair", value)

    @property
    def placeholder(self) -> str:
        return self.settings.value("placeholder", DEFAULT_PLACEHOLDER)

    @placeholder.setter
    def placeholder(self, value: str):
        self.settings.setValue("placeholder", value)

    @property
    def mode(self) -> str:
        return self.settings.value("mode", MODE_BATCHED)

    @mode.setter
    def mode(self, value: str):
        self.settings.setValue("mode", value)

    @property
    def provider(self) -> str:
        return self.settings.value("provider", "web")

    @provider.setter
    def provider(self, value: str):
        self.settings.setValue("provider", value)

    @property
    def model(self) -> str:
        return self.settings.value("model", "gpt-4o-mini")

    @model.setter
    def model(self, value: str):
        self.settings.setValue("model", value)

    @property
    def base_url(self) -> str:
        return self.settings.value("base_url", "")

    @base_url.setter
    def base_url(self, value: str):
        self.settings.setValue("base_url", value)

    @property
    def substitutions(self) -> list:
        """
        Ordered list of [pattern, replacement] pairs, stored as JSON.
        """
        raw = self.settings.value("substitutions", "[]")
        try:
            return [tuple(pair) for pair in json.loads(raw) if len(pair) == 2]
        except (TypeError, ValueError):
            return []

    @substitutions.setter
    def substitutions(self, pairs: list):
        self.settings.setValue("substitutions", json.dumps([list(p) for p in pairs], ensure_ascii=False))

    @property
    def particles(self) -> list:
        return self.settings.value("particles", list(DEFAULT_PARTICLES), type=list)

    @particles.setter
    def particles(self, value: list):
        self.settings.setValue("particles", value)

    def to_converter_config(self) -> ConverterConfig:
        return ConverterConfig(
            language_pair=self.language_pair,
            substitutions=tuple(self.substitutions),
            particles=tuple(self.particles),
            placeholder=self.placeholder,
            mode=self.mode,
        )

    def sync(self):
        self.settings.sync()
