"""
UI strings: EN (default) and RU dictionaries under app/i18n/*.json.

t(key, **kwargs) reads the language from st.session_state["lang"]; keys missing
in RU fall back to EN, and unknown keys come back unchanged.
"""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Callable

import streamlit as st

_I18N_DIR = Path(__file__).resolve().parent

DEFAULT_LANG = "EN"
LANGUAGES = ("EN", "RU")


@lru_cache(maxsize=None)
def load_lang(lang: str) -> dict[str, str]:
    path = _I18N_DIR / f"{lang.lower()}.json"
    if not path.exists():
        return {}
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _current_lang() -> str:
    lang = st.session_state.get("lang", DEFAULT_LANG)
    return lang if lang in LANGUAGES else DEFAULT_LANG


def translate(lang: str, key: str, **kwargs) -> str:
    raw = load_lang(lang).get(key)
    if raw is None:
        raw = load_lang(DEFAULT_LANG).get(key, key)
    if not kwargs:
        return raw
    try:
        return raw.format(**kwargs)
    except (KeyError, ValueError):
        return raw


def translator(lang: str) -> Callable[..., str]:
    """A t()-compatible callable pinned to one language (for validation and exports)."""

    def _t(key: str, **kwargs) -> str:
        return translate(lang, key, **kwargs)

    return _t


def t(key: str, **kwargs) -> str:
    return translate(_current_lang(), key, **kwargs)
