from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Dict, Optional
import tomllib

from .errors import MappingError


@lru_cache(maxsize=None)
def _load_rules(name: str) -> Dict[str, Dict[str, str]]:
    """Load a TOML rule file from the ``config/rules`` directory.

    Parameters
    ----------
    name: str
        Name of the rule file without extension.
    """

    path = resources.files("config").joinpath("rules", f"{name}.toml")
    if not path.is_file():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def normalize_vocab(value: Optional[str], vocab: str, row: Optional[int] = None) -> Optional[str]:
    """Recode ``value`` using the ``vocab`` table of ``config/rules/vocab.toml``.

    Source values are matched exactly.  ``None`` passes through unchanged;
    any other value missing from the table raises :class:`MappingError` so
    the caller decides whether to keep, replace or drop it.
    """

    if value is None:
        return None
    section = _load_rules("vocab").get(vocab, {})
    if value not in section:
        raise MappingError(f"unmapped {vocab} value {value!r}", row=row)
    return section[value]


def recode(value: Optional[str], vocab: str) -> Optional[str]:
    """Return the recoded ``value`` or ``value`` itself when no rule applies."""

    if value is None:
        return None
    return _load_rules("vocab").get(vocab, {}).get(value, value)


def lookup_vocab(value: Optional[str], vocab: str, default: Optional[str] = None) -> Optional[str]:
    """Return the ``vocab`` entry for ``value``, falling back to ``default``."""

    return _load_rules("vocab").get(vocab, {}).get(value, default)


def strip_or_none(value: Optional[str]) -> Optional[str]:
    """Trim whitespace, mapping blank strings to ``None``."""

    if value is None:
        return None
    value = value.strip()
    return value or None
