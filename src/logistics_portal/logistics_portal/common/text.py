from __future__ import annotations

import re
import unicodedata

_PAREN_RE = re.compile(r"\(.*?\)")
_WS_RE = re.compile(r"\s+")


def strip_diacritics(value: str) -> str:
    # NFD does not decompose đ/Đ, map it explicitly.
    value = value.replace("đ", "d").replace("Đ", "D")
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def normalize_name(value: object) -> str:
    """Lower-case, diacritic-free, whitespace-collapsed name without "(...)" suffixes."""
    if value is None:
        return ""
    s = _PAREN_RE.sub(" ", str(value))
    s = strip_diacritics(s).lower()
    return _WS_RE.sub(" ", s).strip()


def names_match(a: object, b: object, *, min_partial: int = 4) -> bool:
    na, nb = normalize_name(a), normalize_name(b)
    if not na or not nb:
        return False
    if na == nb:
        return True
    shorter = na if len(na) <= len(nb) else nb
    longer = nb if shorter is na else na
    return len(shorter) >= min_partial and shorter in longer


def safe_token(value: object, default: str = "SYSTEM") -> str:
    """Replace anything outside [A-Za-z0-9] with "_" (backup file names)."""
    if not value:
        return default
    return re.sub(r"[^a-z0-9]", "_", str(value), flags=re.IGNORECASE)
