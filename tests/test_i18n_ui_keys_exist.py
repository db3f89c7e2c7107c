"""i18n UI key coverage: every t("...")/t('...') key exists in RU and EN."""
from __future__ import annotations

import json
import re
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.models import LaserClass  # noqa: E402


def _load_json(path: Path) -> dict:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _extract_t_keys(content: str) -> set[str]:
    """Extract i18n keys from t("...") and t('...') calls (string literals only)."""
    pattern = r'\bt\s*\(\s*["\']([^"\']+)["\']\s*'
    return set(re.findall(pattern, content))


def test_ui_keys_exist_in_ru_and_en() -> None:
    """Every t("key")/t('key') in UI sources exists in both RU and EN dicts."""
    ru_keys = set(_load_json(ROOT / "app" / "i18n" / "ru.json"))
    en_keys = set(_load_json(ROOT / "app" / "i18n" / "en.json"))

    sources = [
        ROOT / "app" / "streamlit_app.py",
        ROOT / "app" / "ui_components.py",
        *sorted((ROOT / "app" / "views").glob("*.py")),
    ]
    all_extracted: set[str] = set()
    for path in sources:
        all_extracted |= _extract_t_keys(path.read_text(encoding="utf-8"))

    assert all_extracted
    missing_ru = all_extracted - ru_keys
    missing_en = all_extracted - en_keys
    assert not missing_ru, f"Keys in UI but missing in RU: {sorted(missing_ru)}"
    assert not missing_en, f"Keys in UI but missing in EN: {sorted(missing_en)}"


def test_every_laser_class_has_a_label() -> None:
    """Class badges build keys as class.<member name>; all of them must exist."""
    en_keys = set(_load_json(ROOT / "app" / "i18n" / "en.json"))
    ru_keys = set(_load_json(ROOT / "app" / "i18n" / "ru.json"))
    expected = {f"class.{cls.name.lower()}" for cls in LaserClass}
    assert expected <= en_keys
    assert expected <= ru_keys
