from __future__ import annotations
import argparse
import logging
import sys

from .binary.codecs.bytecursor import ByteCursor
from .cipher.xtea import DEFAULT_ROUNDS, UnalignedInput, Xtea
from .models.key import XteaKey
from .models.settings import CipherSettings, SettingsError, load_settings

logger = logging.getLogger(__name__)

# canonical cross-implementation fixture
VECTOR_KEY = (0x00010203, 0x04050607, 0x08090A0B, 0x0C0D0E0F)
VECTOR_PLAIN = (0x01234567, 0x89ABCDEF)


def _settings_from_args(args) -> CipherSettings:
    if args.config:
        settings = load_settings(args.config)
    else:
        settings = CipherSettings(key=args.key)
    if args.rounds is None and not args.strict:
        return settings
    return CipherSettings(
        key=settings.key,
        rounds=settings.rounds if args.rounds is None else args.rounds,
        strict=settings.strict or args.strict,
    )


def _read_input(path: str, as_hex: bool) -> bytes:
    with open(path, "rb") as fh:
        raw = fh.read()
    if as_hex:
        return bytes.fromhex(raw.decode("ascii"))
    return raw


def _write_output(path: str, data: bytes, as_hex: bool) -> None:
    if as_hex:
        with open(path, "w", encoding="ascii") as out:
            out.write(data.hex() + "\n")
    else:
        with open(path, "wb") as out:
            out.write(data)


def cmd_transform(args):
    settings = _settings_from_args(args)
    cipher = settings.build_cipher()
    data = _read_input(args.input, args.hex)

    src = ByteCursor(data)
    dst = ByteCursor.with_capacity(len(data))
    if args.cmd == "encipher":
        blocks = cipher.encipher(src, dst, strict=settings.strict)
    else:
        blocks = cipher.decipher(src, dst, strict=settings.strict)

    _write_output(args.output, dst.getvalue(), args.hex)
    logger.info("%s: %d block(s), %d byte(s) written to %s", args.cmd, blocks, len(dst), args.output)
    return 0


def cmd_vector(args):
    cipher = Xtea(XteaKey(words=VECTOR_KEY), rounds=args.rounds)
    c0, c1 = cipher.encipher_block(*VECTOR_PLAIN)
    p0, p1 = cipher.decipher_block(c0, c1)
    print(f"key={XteaKey(words=VECTOR_KEY).hex()} rounds={args.rounds}")
    print(f"plain={VECTOR_PLAIN[0]:08x}{VECTOR_PLAIN[1]:08x} cipher={c0:08x}{c1:08x}")
    if (p0, p1) != VECTOR_PLAIN:
        print("decipher did not invert encipher", file=sys.stderr)
        return 1
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="xteabuf", description="XTEA block cipher utilities")
    p.add_argument("--log-level", default="warning", choices=["warning", "info", "debug"])
    sub = p.add_subparsers(dest="cmd", required=True)

    for name, help_text in (("encipher", "encipher whole 8-byte blocks"),
                            ("decipher", "decipher whole 8-byte blocks")):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("input", help="input file")
        sp.add_argument("output", help="output file")
        keys = sp.add_mutually_exclusive_group(required=True)
        keys.add_argument("--key", help="128-bit key as 32 hex characters")
        keys.add_argument("--config", help="JSON settings file (key, rounds, strict)")
        sp.add_argument("--rounds", type=int, default=None, help=f"round count (default {DEFAULT_ROUNDS})")
        sp.add_argument("--strict", action="store_true", help="refuse input that is not a multiple of 8 bytes")
        sp.add_argument("--hex", action="store_true", help="read and write hex text instead of raw bytes")
        sp.set_defaults(func=cmd_transform)

    sp = sub.add_parser("vector", help="print the reference test vector")
    sp.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS)
    sp.set_defaults(func=cmd_vector)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, ns.log_level.upper()),
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return ns.func(ns)
    except (SettingsError, UnalignedInput) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        print(f"invalid argument: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"file error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
