import argparse
import sys
from dataclasses import replace

from ai.client import create_backend
from core.config.app_config import AppConfig
from core.config.converter_config import MODES, parse_substitutions
from core.converter import ConversionEvent, FileConverter
from core.logger import get_logger, setup_exception_hook
from core.settings_manager import KeyringManager

logger = get_logger(__name__)

PROVIDERS = ["web", "mock", "openai", "deepseek", "ollama", "custom"]


def build_parser(app_config: AppConfig) -> argparse.ArgumentParser:
    """Options default to the stored settings."""
    parser = argparse.ArgumentParser(description="Rename Japanese files and tags to romaji / English")
    parser.add_argument("files", nargs="*", help="Files to convert")
    parser.add_argument("--language-pair", default=app_config.language_pair, help="Source|target language codes")
    parser.add_argument("--provider", default=app_config.provider, choices=PROVIDERS, help="Translation backend")
    parser.add_argument("--model", default=app_config.model, help="Model name for LLM providers")
    parser.add_argument("--base-url", default=app_config.base_url or None, help="API base URL for LLM providers")
    parser.add_argument("--api-key", default=None, help="API key for LLM providers (otherwise read from the keyring)")
    parser.add_argument("--mode", default=app_config.mode, choices=MODES,
                        help="batched: one protected call per field; tokens: one call per script run")
    parser.add_argument("--map", dest="maps", action="append", default=None, metavar="PATTERN:REPLACEMENT",
                        help="Substitution applied to transliterated text, in both modes (repeatable)")
    parser.add_argument("--particle", dest="particles", action="append", default=None,
                        help="Particle kept lowercase after title-casing, in both modes (repeatable)")
    parser.add_argument("--placeholder", default=app_config.placeholder, help="Placeholder character for protected text")
    parser.add_argument("--save-settings", action="store_true",
                        help="Store these options as the new defaults, and the API key in the keyring")
    parser.add_argument("--dry-run", action="store_true", help="Show new names without renaming")
    return parser


def save_settings(args, app_config: AppConfig, keyring_manager: KeyringManager):
    app_config.language_pair = args.language_pair
    app_config.provider = args.provider
    app_config.model = args.model
    app_config.base_url = args.base_url or ""
    app_config.mode = args.mode
    app_config.placeholder = args.placeholder
    if args.maps is not None:
        app_config.substitutions = parse_substitutions(args.maps)
    if args.particles is not None:
        app_config.particles = list(args.particles)
    app_config.sync()

    if args.api_key:
        keyring_manager.set_api_key(args.provider, args.api_key)
    logger.info(f"Settings saved (provider '{args.provider}', mode '{args.mode}')")


def main(argv=None) -> int:
    setup_exception_hook()
    app_config = AppConfig()
    parser = build_parser(app_config)
    args = parser.parse_args(argv)

    if args.save_settings:
        save_settings(args, app_config, KeyringManager())
        print("Settings saved.")
        if not args.files:
            return 0
    elif not args.files:
        parser.error("no files given")

    overrides = dict(language_pair=args.language_pair, placeholder=args.placeholder, mode=args.mode)
    if args.maps is not None:
        overrides["substitutions"] = tuple(parse_substitutions(args.maps))
    if args.particles is not None:
        overrides["particles"] = tuple(args.particles)
    config = replace(app_config.to_converter_config(), **overrides)

    api_key = args.api_key
    if not api_key and args.provider not in ("web", "mock"):
        api_key = KeyringManager().get_api_key(args.provider)
    backend = create_backend(args.provider, model=args.model, base_url=args.base_url,
                             api_key=api_key, placeholder=config.placeholder)

    converter = FileConverter(args.files, config, backend.translate, backend.transliterate,
                              dry_run=args.dry_run)

    print(f"Converting {len(args.files)} file(s) with provider '{args.provider}'...")
    failed = 0
    converted = 0
    for outcome in converter.convert():
        if outcome.event == ConversionEvent.CONVERTED:
            converted += 1
            print(f"{outcome.old_name} -> {outcome.new_name}")
        elif outcome.event == ConversionEvent.FAILED:
            failed += 1
            print(f"[Error] {outcome.old_name}: {outcome.error}")

    print(f"Done. Converted: {converted}, Failed: {failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
