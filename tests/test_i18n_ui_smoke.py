"""i18n smoke: compile the UI entry point and resolve strings outside a Streamlit run."""
from __future__ import annotations

import compileall
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.i18n import DEFAULT_LANG, translate, translator  # noqa: E402


def test_streamlit_app_compiles() -> None:
    app_file = ROOT / "app" / "streamlit_app.py"
    result = compileall.compile_file(str(app_file), quiet=1)
    assert result is True


def test_translate_falls_back_to_key_for_unknown_entries() -> None:
    assert translate("RU", "no.such.key") == "no.such.key"
    assert translate("DE", "app.title") == translate(DEFAULT_LANG, "app.title")


def test_translator_formats_placeholders() -> None:
    en = translator("EN")
    assert en("validation.field_required", field="power_W") == "power_W is required"
    ru = translator("RU")
    assert "power_W" in ru("validation.field_required", field="power_W")


def test_missing_placeholder_returns_raw_string() -> None:
    raw = translate("EN", "validation.field_required")
    assert translate("EN", "validation.field_required", other="x") == raw
