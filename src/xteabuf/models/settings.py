from __future__ import annotations
import json
from pathlib import Path
from typing import TYPE_CHECKING
from pydantic import BaseModel, Field, ValidationError, field_validator

from .key import XteaKey

if TYPE_CHECKING:
    from ..cipher.xtea import Xtea


class SettingsError(ValueError):
    pass


class CipherSettings(BaseModel):
    key: XteaKey
    rounds: int = Field(32, ge=0, strict=True)
    strict: bool = False

    @field_validator("key", mode="before")
    @classmethod
    def _coerce_key(cls, v):
        # accept "000102...0f" or [w0, w1, w2, w3] as well as {"words": [...]}
        if isinstance(v, str):
            return XteaKey.from_hex(v)
        if isinstance(v, (list, tuple)):
            return XteaKey(words=tuple(v))
        if isinstance(v, dict) and isinstance(v.get("words"), (list, tuple)):
            return XteaKey(words=tuple(v["words"]))
        return v

    def build_cipher(self) -> Xtea:
        from ..cipher.xtea import Xtea
        return Xtea(self.key, rounds=self.rounds)


def load_settings(path: str | Path) -> CipherSettings:
    p = Path(path)
    if not p.exists():
        raise SettingsError(f"settings file not found: {p}")
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SettingsError(f"invalid JSON in {p}: {exc}") from exc
    try:
        return CipherSettings.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise SettingsError(f"{p}: {loc}: {first['msg']}") from exc
