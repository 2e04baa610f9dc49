class ConverterError(Exception):
    """Base class for errors raised by the converter."""


class TranslationUnavailable(ConverterError):
    """
    The translation backend could not be reached or returned content that
    could not be parsed.
    """

    def __init__(self, message: str, text: str = "", language_pair: str = ""):
        super().__init__(message)
        self.text = text
        self.language_pair = language_pair
