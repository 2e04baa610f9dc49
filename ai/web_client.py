import html

import requests
from lxml import html as lxml_html

from core.errors import TranslationUnavailable
from core.logger import get_logger

logger = get_logger(__name__)

TRANSLATOR_URL = "https://translate.google.com/translate_t"

TRANSLIT_ELEMENT_ID = "src-translit"
RESULT_ELEMENT_ID = "result_box"


class WebTranslator:
    """
    Translation backend that scrapes the classic web translator page.

    The page carries both the phonetic rendering of the source
    (src-translit) and the translation (result_box).
    """

    def __init__(self, url: str = TRANSLATOR_URL, timeout: float = 10.0, session=None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", "Mozilla/5.0")

    def translate(self, text: str, language_pair: str) -> str:
        return self._fetch_element(text, language_pair, RESULT_ELEMENT_ID)

    def transliterate(self, text: str, language_pair: str) -> str:
        return self._fetch_element(text, language_pair, TRANSLIT_ELEMENT_ID)

    def _fetch_element(self, text: str, language_pair: str, element_id: str) -> str:
        params = {"hl": "en", "ie": "UTF8", "text": text, "langpair": language_pair}
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Translator request failed: {e}")
            raise TranslationUnavailable(f"Translator request failed: {e}", text=text, language_pair=language_pair) from e

        return extract_element_text(response.text, element_id, text, language_pair)


def extract_element_text(page: str, element_id: str, text: str = "", language_pair: str = "") -> str:
    """
    Returns the text content of the element with the given id, entity-escaped
    again. lxml decodes entities while parsing and callers decode backend
    output once, so text the page displays as "&amp;" comes out as "&amp;".
    """
    try:
        doc = lxml_html.fromstring(page or "<html/>")
    except Exception as e:
        raise TranslationUnavailable(f"Unparseable translator page: {e}", text=text, language_pair=language_pair) from e

    nodes = doc.xpath(f'//*[@id="{element_id}"]')
    if not nodes:
        logger.error(f"Element #{element_id} not found in translator page")
        raise TranslationUnavailable(
            f"Element #{element_id} not found in translator page", text=text, language_pair=language_pair
        )

    return html.escape(nodes[0].text_content(), quote=False)
