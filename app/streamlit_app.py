from __future__ import annotations

import sys
from pathlib import Path
import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.i18n import DEFAULT_LANG, LANGUAGES, t  # noqa: E402
from app.views import (  # noqa: E402
    batch,
    classification,
    eyewear,
    mpe,
    multi_wavelength,
    nohd,
    overview,
)
from laser_core.config import CorrectionFactorMode, LaserCalcConfig, load_config  # noqa: E402
from laser_core.logging_config import setup_logging  # noqa: E402


def _init_state() -> None:
    state = st.session_state
    base = load_config()
    state.setdefault("lang", DEFAULT_LANG)
    state.setdefault("correction_mode", base.correction_factor_mode.value)
    state.setdefault("pulse_train_assessment", base.pulse_train_assessment)
    state.setdefault("default_angular_subtense_mrad", base.default_angular_subtense_mrad)
    state.setdefault("log_level", base.log_level)
    state.setdefault("logging_ready", False)


def _config_from_state(state) -> LaserCalcConfig:
    return LaserCalcConfig(
        correction_factor_mode=CorrectionFactorMode(state["correction_mode"]),
        pulse_train_assessment=bool(state["pulse_train_assessment"]),
        default_angular_subtense_mrad=float(state["default_angular_subtense_mrad"]),
        log_level=state["log_level"],
    )


def main() -> None:
    st.set_page_config(page_title="Laser Safety Calculator", layout="wide")
    _init_state()
    state = st.session_state

    if not state["logging_ready"]:
        setup_logging(state["log_level"])
        state["logging_ready"] = True

    with st.sidebar:
        st.title(t("app.title"))
        st.radio(t("sidebar.language"), list(LANGUAGES), key="lang", horizontal=True)
        st.radio(
            t("sidebar.correction_mode"),
            [m.value for m in CorrectionFactorMode],
            key="correction_mode",
            format_func=lambda x: t("mode.literal") if x == "LITERAL" else t("mode.corrected"),
            help=t("sidebar.correction_mode_help"),
        )
        st.checkbox(
            t("sidebar.pulse_train"),
            key="pulse_train_assessment",
            help=t("sidebar.pulse_train_help"),
        )

        pages = {
            t("nav.overview"): overview,
            t("nav.classification"): classification,
            t("nav.multi_wavelength"): multi_wavelength,
            t("nav.mpe"): mpe,
            t("nav.nohd"): nohd,
            t("nav.eyewear"): eyewear,
            t("nav.batch"): batch,
        }
        page = st.radio(t("sidebar.navigation"), list(pages))

    state["config"] = _config_from_state(state)
    pages[page].render(state)


if __name__ == "__main__":
    main()
