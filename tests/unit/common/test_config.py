"""Tests for voice configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from voice_menu.common.config import (
    ProximityProfile,
    VoiceConfig,
    config_from_dict,
    load_config,
)
from voice_menu.common.constants import VoiceMode


def write_config(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "voice.json"
    path.write_text(json.dumps(data))
    return path


class TestVoiceConfig:
    def test_stock_values(self, config: VoiceConfig) -> None:
        """Test the stock profiles and defaults."""
        assert config.whisper == ProximityProfile(0.0, 8.0, 10.0)
        assert config.talk == ProximityProfile(0.0, 25.0, 15.0)
        assert config.shout == ProximityProfile(0.0, 60.0, 18.0)
        assert config.radio == ProximityProfile(0.0, 100000.0, 15.0)
        assert config.radio_lowpass is True
        assert config.default_mode == VoiceMode.TALK
        assert config.default_channel == 1
        assert config.default_radio_transmit is True

    def test_defaults_are_clamped(self) -> None:
        """Test out-of-range defaults are clamped, not rejected."""
        config = VoiceConfig(default_mode=5, default_channel=42)
        assert config.default_mode == 2
        assert config.default_channel == 10

    def test_profile_for(self, config: VoiceConfig) -> None:
        assert config.profile_for(VoiceMode.WHISPER) is config.whisper
        assert config.profile_for(VoiceMode.TALK) is config.talk
        assert config.profile_for(VoiceMode.SHOUT) is config.shout
        assert config.profile_for(17) is config.talk


class TestLoadConfig:
    def test_full_file(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path,
            {
                "profiles": {
                    "whisper": {"near": 1, "far": 4, "gain": 6},
                    "talk": {"near": 2, "far": 30, "gain": 14},
                    "shout": {"near": 3, "far": 90, "gain": 20},
                    "radio": {"near": 0, "far": 50000, "gain": 11},
                },
                "radio_lowpass": False,
                "defaults": {"mode": "shout", "channel": 4, "radio_transmit": False},
            },
        )
        config = load_config(path)
        assert config.whisper == ProximityProfile(1.0, 4.0, 6.0)
        assert config.talk == ProximityProfile(2.0, 30.0, 14.0)
        assert config.shout == ProximityProfile(3.0, 90.0, 20.0)
        assert config.radio == ProximityProfile(0.0, 50000.0, 11.0)
        assert config.radio_lowpass is False
        assert config.default_mode == VoiceMode.SHOUT
        assert config.default_channel == 4
        assert config.default_radio_transmit is False

    def test_missing_keys_use_stock(self, tmp_path: Path) -> None:
        """Test a partial file only overrides what it names."""
        path = write_config(tmp_path, {"profiles": {"talk": {"far": 40}}})
        config = load_config(path)
        assert config.talk == ProximityProfile(0.0, 40.0, 15.0)
        assert config.whisper == VoiceConfig().whisper
        assert config.default_channel == 1

    def test_empty_object(self, tmp_path: Path) -> None:
        assert load_config(write_config(tmp_path, {})) == VoiceConfig()

    def test_gain_not_clamped_at_load(self, tmp_path: Path) -> None:
        """Test over-range gains load as-is; the policy clamps them."""
        path = write_config(tmp_path, {"profiles": {"shout": {"gain": 30}}})
        assert load_config(path).shout.gain == 30.0

    def test_integer_mode(self, tmp_path: Path) -> None:
        path = write_config(tmp_path, {"defaults": {"mode": 0}})
        assert load_config(path).default_mode == VoiceMode.WHISPER

    def test_out_of_range_channel_clamped(self, tmp_path: Path) -> None:
        path = write_config(tmp_path, {"defaults": {"channel": 0}})
        assert load_config(path).default_channel == 1

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "voice.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="voice.json"):
            load_config(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, [1, 2, 3]))

    @pytest.mark.parametrize(
        "data",
        [
            {"defaults": {"mode": "yell"}},
            {"defaults": {"mode": 1.5}},
            {"defaults": {"channel": "three"}},
            {"defaults": {"channel": True}},
            {"profiles": {"talk": {"gain": "loud"}}},
            {"profiles": {"talk": {"gain": None}}},
            {"profiles": ["talk"]},
            {"radio_lowpass": "false"},
            {"radio_lowpass": 0.5},
            {"radio_lowpass": 0},
            {"defaults": {"radio_transmit": "false"}},
            {"defaults": {"radio_transmit": 1}},
        ],
    )
    def test_wrong_types(self, tmp_path: Path, data: dict) -> None:
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, data))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.json")


def test_config_from_dict_mode_names_case_insensitive() -> None:
    assert config_from_dict({"defaults": {"mode": "Whisper"}}).default_mode == 0
