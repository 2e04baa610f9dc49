import os
import re
import time
from typing import Tuple

from openai import OpenAI

from ai.prompts import (
    TRANSLATE_SYSTEM_PROMPT,
    TRANSLATE_USER_PROMPT_TEMPLATE,
    TRANSLITERATE_SYSTEM_PROMPT,
    TRANSLITERATE_USER_PROMPT_TEMPLATE,
)
from core.config.converter_config import DEFAULT_PLACEHOLDER
from core.errors import TranslationUnavailable
from core.logger import get_logger

logger = get_logger(__name__)

# Providers that talk to a self-hosted endpoint and accept any key
KEYLESS_PROVIDERS = {"ollama"}
# Providers the OpenAI SDK reaches without an explicit base URL
DEFAULT_URL_PROVIDERS = {"openai", "custom"}
# A whole answer wrapped in a markdown fence: ```lang\n...\n```
CODE_FENCE = re.compile(r"\A```[\w+-]*[ \t]*\n(.*?)\n[ \t]*```\Z", re.DOTALL)


def split_language_pair(language_pair: str) -> Tuple[str, str]:
    """'ja|en' -> ('ja', 'en')"""
    source, _, target = (language_pair or "").partition("|")
    return source or "ja", target or "en"


def strip_code_fence(content: str) -> str:
    """
    Unwraps an answer the model put inside a fenced code block. Anything else,
    including answers that merely start with backticks, is returned as is.
    """
    match = CODE_FENCE.match(content)
    return match.group(1).strip() if match else content


class LLMClient:
    """
    Translation backend backed by an OpenAI-compatible chat completion API.

    Exposes the two capabilities the converter needs: translate() for
    katakana loanwords and transliterate() for hiragana/kanji.
    """

    def __init__(self, api_key: str = None, base_url: str = None, model: str = "gpt-4o-mini",
                 provider: str = "custom", placeholder: str = DEFAULT_PLACEHOLDER):
        self.api_key = api_key or os.getenv("LLM_API_KEY")
        self.base_url = base_url or os.getenv("LLM_BASE_URL")
        self.model = model
        self.provider = provider
        self.placeholder = placeholder

        if self.provider in KEYLESS_PROVIDERS and not self.api_key:
            self.api_key = self.provider

        self.client = None
        if self.provider == "mock":
            return
        if not self.api_key:
            logger.warning(f"No API key for provider '{self.provider}'.")
            return
        if not self.base_url and self.provider not in DEFAULT_URL_PROVIDERS:
            logger.warning(f"No base URL for provider '{self.provider}'.")
            return
        self.client = OpenAI(api_key=self.api_key, base_url=self.base_url)

    def translate(self, text: str, language_pair: str) -> str:
        source_lang, target_lang = split_language_pair(language_pair)
        prompt = TRANSLATE_USER_PROMPT_TEMPLATE.format(
            source_lang=source_lang, target_lang=target_lang, text=text
        )
        return self._complete(TRANSLATE_SYSTEM_PROMPT, prompt, text, language_pair)

    def transliterate(self, text: str, language_pair: str) -> str:
        source_lang, target_lang = split_language_pair(language_pair)
        prompt = TRANSLITERATE_USER_PROMPT_TEMPLATE.format(
            source_lang=source_lang, target_lang=target_lang, text=text, placeholder=self.placeholder
        )
        return self._complete(TRANSLITERATE_SYSTEM_PROMPT, prompt, text, language_pair)

    def _complete(self, system_content: str, user_content: str, text: str, language_pair: str) -> str:
        if self.provider == "mock":
            time.sleep(0.05)
            return f"[Mock] {text}"

        if not self.client:
            raise TranslationUnavailable(
                f"LLM client for provider '{self.provider}' is not initialized (check API key / base URL)",
                text=text, language_pair=language_pair,
            )

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_content},
                    {"role": "user", "content": user_content},
                ],
                temperature=0.1,
            )
        except Exception as e:
            logger.error(f"LLM request failed: {e}", exc_info=True)
            raise TranslationUnavailable(f"LLM request failed: {e}", text=text, language_pair=language_pair) from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise TranslationUnavailable("LLM returned an empty answer", text=text, language_pair=language_pair)

        content = strip_code_fence(content.strip())

        logger.debug(f"LLM answer for {text!r}: {content!r}")
        return content

    def test_connection(self) -> Tuple[bool, str]:
        """
        Returns: (success, message)
        """
        if self.provider == "mock":
            return True, "Mock mode is always available."
        if not self.client:
            return False, "Client not initialized. Check API Key."

        try:
            self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": "Hi"}],
                max_tokens=1,
            )
            return True, f"Successfully connected to {self.model}!"
        except Exception as e:
            return False, f"Connection failed: {str(e)}"


def create_backend(provider: str, model: str = "gpt-4o-mini", base_url: str = None,
                   api_key: str = None, placeholder: str = DEFAULT_PLACEHOLDER):
    """
    Returns an object with translate() and transliterate() for the provider.
    'web' scrapes the web translator; every other provider goes through LLMClient.
    """
    if provider == "web":
        from ai.web_client import WebTranslator
        return WebTranslator()
    return LLMClient(api_key=api_key, base_url=base_url, model=model, provider=provider, placeholder=placeholder)
