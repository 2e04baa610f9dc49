import os

import pytest

import main
from ai.client import create_backend


class _SharedQSettings:
    """QSettings stand-in whose values outlive the instance, like the real one."""
    store = {}

    def __init__(self, *args, **kwargs):
        pass

    def value(self, key, default=None, type=None):
        if key not in self.store:
            return default
        return self.store[key]

    def setValue(self, key, value):
        self.store[key] = value

    def sync(self):
        return None


class _FakeKeyringManager:
    saved = {}

    def set_api_key(self, provider, value):
        self.saved[provider] = value

    def get_api_key(self, provider):
        return self.saved.get(provider)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    _SharedQSettings.store = {}
    _FakeKeyringManager.saved = {}
    monkeypatch.setattr("core.config.app_config.QSettings", _SharedQSettings)
    monkeypatch.setattr(main, "KeyringManager", _FakeKeyringManager)


def test_dry_run_with_mock_provider(tmp_path, capsys):
    src = tmp_path / "Song.mp3"
    src.write_bytes(b"")

    code = main.main([str(src), "--provider", "mock", "--dry-run"])

    assert code == 0
    out = capsys.readouterr().out
    assert "Song.mp3 -> Song.mp3" in out
    assert "Converted: 1, Failed: 0" in out


def test_missing_file_sets_exit_code(tmp_path, capsys):
    code = main.main([os.path.join(str(tmp_path), "nope.mp3"), "--provider", "mock"])

    assert code == 1
    assert "[Error] nope.mp3: File not found" in capsys.readouterr().out


def test_mock_provider_renames_katakana(tmp_path):
    src = tmp_path / "ロック.mp3"
    src.write_bytes(b"")

    code = main.main([str(src), "--provider", "mock", "--mode", "tokens"])

    assert code == 0
    assert (tmp_path / "[Mock] ロック.mp3").exists()


def test_map_applies_in_batched_mode(tmp_path):
    src = tmp_path / "東京.mp3"
    src.write_bytes(b"")

    code = main.main([str(src), "--provider", "mock", "--map", "Mock:Fake"])

    assert code == 0
    assert (tmp_path / "[Fake] 東京.mp3").exists()


def test_parser_collects_maps_and_particles():
    from core.config.app_config import AppConfig

    args = main.build_parser(AppConfig()).parse_args(
        ["a.mp3", "--map", "ou:o", "--map", "uu:u", "--particle", "no"]
    )
    assert args.maps == ["ou:o", "uu:u"]
    assert args.particles == ["no"]
    assert args.mode == "batched"
    assert args.provider == "web"


def test_saved_settings_become_defaults(tmp_path, capsys):
    code = main.main(["--save-settings", "--provider", "mock", "--mode", "tokens",
                      "--map", "ou:o", "--particle", "no", "--api-key", "sk-test"])

    assert code == 0
    assert "Settings saved." in capsys.readouterr().out
    assert _FakeKeyringManager.saved == {"mock": "sk-test"}

    from core.config.app_config import AppConfig
    cfg = AppConfig()
    assert cfg.provider == "mock"
    assert cfg.to_converter_config().substitutions == (("ou", "o"),)
    assert cfg.to_converter_config().particles == ("no",)

    src = tmp_path / "ロック.mp3"
    src.write_bytes(b"")
    assert main.main([str(src)]) == 0
    assert (tmp_path / "[Mock] ロック.mp3").exists()


def test_stored_key_is_used_for_llm_providers(tmp_path, monkeypatch):
    _FakeKeyringManager.saved = {"deepseek": "sk-stored"}
    seen = {}

    def _fake_backend(provider, model=None, base_url=None, api_key=None, placeholder=None):
        seen["api_key"] = api_key
        return create_backend("mock")

    monkeypatch.setattr(main, "create_backend", _fake_backend)
    src = tmp_path / "Song.mp3"
    src.write_bytes(b"")

    assert main.main([str(src), "--provider", "deepseek", "--dry-run"]) == 0
    assert seen["api_key"] == "sk-stored"


def test_no_files_is_a_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main.main([])
    assert exc_info.value.code == 2
