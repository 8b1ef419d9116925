import json

import pytest

from xteabuf.cipher.xtea import Xtea
from xteabuf.models.key import XteaKey
from xteabuf.models.settings import CipherSettings, SettingsError, load_settings

KEY_HEX = "000102030405060708090a0b0c0d0e0f"


def _write(tmp_path, payload):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults_and_hex_key():
    s = CipherSettings(key=KEY_HEX)
    assert s.rounds == 32
    assert s.strict is False
    assert s.key == XteaKey.from_hex(KEY_HEX)


def test_key_as_word_list():
    s = CipherSettings(key=[1, 2, 3, 4], rounds=16)
    assert s.key.words == (1, 2, 3, 4)
    cipher = s.build_cipher()
    assert isinstance(cipher, Xtea)
    assert cipher.rounds == 16


def test_load_settings(tmp_path):
    path = _write(tmp_path, {"key": KEY_HEX, "rounds": 64, "strict": True})
    s = load_settings(path)
    assert s.rounds == 64
    assert s.strict is True
    assert s.build_cipher().encipher_block(0x01234567, 0x89ABCDEF) == (0xDB67A40C, 0x44BB17C5)


def test_model_dump_round_trips():
    s = CipherSettings(key=KEY_HEX, rounds=8)
    assert CipherSettings.model_validate(s.model_dump()) == s


@pytest.mark.parametrize(
    "payload",
    [
        {"key": "0011"},
        {"key": [1, 2, 3]},
        {"key": KEY_HEX, "rounds": -1},
        {"rounds": 32},
    ],
)
def test_invalid_settings(tmp_path, payload):
    with pytest.raises(SettingsError):
        load_settings(_write(tmp_path, payload))


def test_missing_file(tmp_path):
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "nope.json")


def test_bad_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{key:", encoding="utf-8")
    with pytest.raises(SettingsError, match="invalid JSON"):
        load_settings(path)


def test_undecodable_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_bytes(b"\xff\xfe{")
    with pytest.raises(SettingsError, match="invalid JSON"):
        load_settings(path)


@pytest.mark.parametrize("rounds", [True, "32", 1.5])
def test_rounds_must_be_a_real_int(tmp_path, rounds):
    with pytest.raises(ValueError):
        CipherSettings(key=KEY_HEX, rounds=rounds)
    with pytest.raises(SettingsError):
        load_settings(_write(tmp_path, {"key": KEY_HEX, "rounds": rounds}))
