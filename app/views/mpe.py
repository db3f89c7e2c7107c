from __future__ import annotations

import pandas as pd
import streamlit as st

from app.i18n import t
from app.ui_components import steps_expander
from laser_core.errors import LaserCalcError
from laser_core.mpe import compute_mpe, compute_skin_mpe


def _rules_frame(result) -> pd.DataFrame:
    rows = [
        (t("mpe.rule1"), result.mpe_single_pulse),
        (t("mpe.rule2"), result.mpe_average_per_pulse),
        (t("mpe.rule3"), result.mpe_thermal),
    ]
    return pd.DataFrame(
        [
            {
                t("mpe.rule"): name,
                t("mpe.value"): q.value if q is not None else None,
                t("mpe.unit"): q.unit.value if q is not None else "",
            }
            for name, q in rows
        ]
    )


def render(state: dict) -> None:
    st.header(t("mpe.header"))
    st.caption(t("mpe.caption"))

    col1, col2 = st.columns(2)
    with col1:
        wavelength = st.number_input(
            t("form.wavelength_nm"), min_value=180.0, max_value=1e6, value=1064.0, key="mpe_wavelength_nm"
        )
        exposure_s = st.number_input(
            t("form.exposure_time_s"), min_value=0.0, value=10.0, format="%.6g", key="mpe_exposure_s"
        )
        emission_type = st.radio(
            t("form.emission_type"),
            ["CW", "Pulsed"],
            format_func=lambda x: t("form.cw") if x == "CW" else t("form.pulsed"),
            horizontal=True,
            key="mpe_emission_type",
        )
    pulse_width = None
    prf = None
    with col2:
        if emission_type == "Pulsed":
            pulse_width = st.number_input(
                t("form.pulse_width_s"), min_value=0.0, value=1e-8, format="%.3e", key="mpe_pulse_width_s"
            )
            prf = st.number_input(
                t("form.repetition_rate_hz"), min_value=0.0, value=1000.0, format="%.6g", key="mpe_prf_hz"
            )

    if exposure_s <= 0 or (pulse_width is not None and pulse_width <= 0):
        st.info(t("mpe.enter_values"))
        return

    config = state["config"]
    try:
        result = compute_mpe(
            wavelength,
            exposure_s,
            emission_type,
            pulse_width_s=pulse_width,
            repetition_rate_hz=prf,
            config=config,
        )
        skin = compute_skin_mpe(wavelength, exposure_s, config=config)
    except (LaserCalcError, ValueError, TypeError) as exc:
        st.error(t("errors.calc_failed", error=exc))
        return

    cols = st.columns(3)
    cols[0].metric(t("mpe.critical"), str(result.critical_mpe))
    cols[1].metric(t("mpe.region"), result.region.value)
    cols[2].metric(t("mpe.skin"), str(skin))
    st.caption(t("mpe.limiting", mechanism=result.limiting_mechanism))

    mf = result.correction_factors
    st.write(t("mpe.factors", ca=f"{mf.ca:.3f}", cb=f"{mf.cb:.3g}", cc=f"{mf.cc:.3f}"))

    if result.mpe_single_pulse is not None:
        st.subheader(t("mpe.rules"))
        st.dataframe(_rules_frame(result), hide_index=True, use_container_width=True)
        if result.pulse_count is not None:
            st.caption(t("mpe.pulse_count", n=result.pulse_count, cp=f"{result.cp:.4f}"))
    steps_expander(t("common.steps"), result.steps)
