import json

from xteabuf.cli import main

KEY_HEX = "000102030405060708090a0b0c0d0e0f"


def test_vector_command(capsys):
    assert main(["vector"]) == 0
    out = capsys.readouterr().out
    assert "cipher=14669763a456e1d8" in out
    assert f"key={KEY_HEX}" in out


def test_encipher_decipher_files(tmp_path):
    plain = tmp_path / "plain.bin"
    enc = tmp_path / "enc.bin"
    dec = tmp_path / "dec.bin"
    plain.write_bytes(b"0123456789abcdef")

    assert main(["encipher", str(plain), str(enc), "--key", KEY_HEX]) == 0
    assert len(enc.read_bytes()) == 16
    assert enc.read_bytes() != plain.read_bytes()
    assert main(["decipher", str(enc), str(dec), "--key", KEY_HEX]) == 0
    assert dec.read_bytes() == plain.read_bytes()


def test_hex_mode(tmp_path):
    src = tmp_path / "in.hex"
    out = tmp_path / "out.hex"
    src.write_text("0123456789abcdef\n", encoding="ascii")
    assert main(["encipher", str(src), str(out), "--key", KEY_HEX, "--hex"]) == 0
    assert out.read_text(encoding="ascii").strip() == "14669763a456e1d8"


def test_config_file_and_rounds_override(tmp_path):
    cfg = tmp_path / "settings.json"
    cfg.write_text(json.dumps({"key": KEY_HEX, "rounds": 8}), encoding="utf-8")
    src = tmp_path / "in.hex"
    out = tmp_path / "out.hex"
    src.write_text("0123456789abcdef", encoding="ascii")
    assert main(["encipher", str(src), str(out), "--config", str(cfg), "--rounds", "64", "--hex"]) == 0
    assert out.read_text(encoding="ascii").strip() == "db67a40c44bb17c5"


def test_strict_rejects_unaligned(tmp_path, capsys):
    src = tmp_path / "in.bin"
    src.write_bytes(bytes(10))
    out = tmp_path / "out.bin"
    assert main(["encipher", str(src), str(out), "--key", KEY_HEX, "--strict"]) == 2
    assert "trailing" in capsys.readouterr().err
    assert not out.exists()


def test_unaligned_input_is_truncated_without_strict(tmp_path):
    src = tmp_path / "in.bin"
    src.write_bytes(bytes(10))
    out = tmp_path / "out.bin"
    assert main(["encipher", str(src), str(out), "--key", KEY_HEX]) == 0
    assert len(out.read_bytes()) == 8


def test_bad_key(tmp_path, capsys):
    src = tmp_path / "in.bin"
    src.write_bytes(bytes(8))
    assert main(["encipher", str(src), str(tmp_path / "o"), "--key", "abcd"]) == 2
    assert capsys.readouterr().err


def test_missing_input(tmp_path, capsys):
    assert main(["encipher", str(tmp_path / "missing"), str(tmp_path / "o"), "--key", KEY_HEX]) == 1
    assert "file error" in capsys.readouterr().err
