import base64
import json
import os
from typing import Dict, Optional

import keyring

from core.logger import get_logger

logger = get_logger(__name__)

APP_NAME = "Romaji_Converter"
FALLBACK_KEY_FILE = "secrets.json"


class KeyringManager:
    """
    Stores provider API keys in the system keyring.
    Falls back to a local obfuscated file if the keyring is unavailable.
    """

    def __init__(self, fallback_path: str = FALLBACK_KEY_FILE):
        self.fallback_path = fallback_path
        self.use_fallback = False
        try:
            # Headless environments often have no usable backend
            keyring.get_password(f"{APP_NAME}_check", "check")
        except Exception as e:
            logger.warning(f"System keyring not available: {e}. Using local fallback.")
            self.use_fallback = True

    def set_api_key(self, provider: str, value: str):
        if not value:
            return

        if self.use_fallback:
            self._save_fallback(provider, value)
            return
        try:
            keyring.set_password(f"{APP_NAME}_providers", provider, value)
        except Exception as e:
            logger.error(f"Failed to save to keyring: {e}. Switching to fallback.")
            self.use_fallback = True
            self._save_fallback(provider, value)

    def get_api_key(self, provider: str) -> Optional[str]:
        """
        Looks up the key for a provider: keyring (or fallback file), then the
        LLM_API_KEY environment variable.
        """
        value = None
        if not self.use_fallback:
            try:
                value = keyring.get_password(f"{APP_NAME}_providers", provider)
            except Exception:
                value = None
        if not value:
            value = self._load_fallback(provider)
        return value or os.getenv("LLM_API_KEY")

    def _save_fallback(self, provider: str, value: str):
        """
        Base64 only: obfuscation, NOT encryption.
        """
        data = self._read_fallback_file()
        data[provider] = base64.b64encode(value.encode("utf-8")).decode("utf-8")
        try:
            with open(self.fallback_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save fallback secrets: {e}")

    def _load_fallback(self, provider: str) -> Optional[str]:
        encoded = self._read_fallback_file().get(provider)
        if not encoded:
            return None
        try:
            return base64.b64decode(encoded).decode("utf-8")
        except (ValueError, UnicodeDecodeError):
            return None

    def _read_fallback_file(self) -> Dict[str, str]:
        if not os.path.exists(self.fallback_path):
            return {}
        try:
            with open(self.fallback_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError):
            return {}
