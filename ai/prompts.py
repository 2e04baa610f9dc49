TRANSLATE_SYSTEM_PROMPT = "You are a professional translator tool. Output only the translated text."

TRANSLATE_USER_PROMPT_TEMPLATE = (
    "Translate the following {source_lang} text to {target_lang}.\n"
    "It is a katakana loanword or phrase from a song title, artist or album name; "
    "give the original word it was borrowed from.\n"
    "Output ONLY the translation.\n\n"
    "Text: {text}"
)

TRANSLITERATE_SYSTEM_PROMPT = "You are a romanization tool. Output only the romanized text."

TRANSLITERATE_USER_PROMPT_TEMPLATE = (
    "Romanize the following {source_lang} text into {target_lang} script using Hepburn romanization.\n"
    "IMPORTANT RULES:\n"
    "1. Do not translate the meaning, only write how it is pronounced.\n"
    "2. Separate words with single spaces.\n"
    "3. Copy every {placeholder} character through unchanged and in place.\n"
    "Output ONLY the romanized text.\n\n"
    "Text: {text}"
)
