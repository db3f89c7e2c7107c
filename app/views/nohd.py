from __future__ import annotations

import math

import streamlit as st

from app.i18n import t
from app.ui_components import steps_expander
from laser_core.errors import LaserCalcError
from laser_core.nohd import compute_nohd

MRAD_TO_RAD = 1e-3


def render(state: dict) -> None:
    st.header(t("nohd.header"))
    st.caption(t("nohd.caption"))

    col1, col2 = st.columns(2)
    with col1:
        power_w = st.number_input(t("form.power_w"), min_value=0.0, value=5e-3, format="%.6g", key="nohd_power_w")
        beam_mm = st.number_input(t("form.beam_diameter_mm"), min_value=0.0, value=2.0, key="nohd_beam_mm")
        divergence_mrad = st.number_input(
            t("nohd.divergence_mrad"), min_value=0.0, value=1.0, key="nohd_divergence_mrad"
        )
    with col2:
        wavelength = st.number_input(
            t("form.wavelength_nm"), min_value=180.0, max_value=1e6, value=532.0, key="nohd_wavelength_nm"
        )
        exposure_s = st.number_input(
            t("form.exposure_time_s"), min_value=0.0, value=0.25, format="%.6g", key="nohd_exposure_s"
        )

    if power_w <= 0 or beam_mm <= 0 or exposure_s <= 0:
        st.info(t("nohd.enter_values"))
        return

    try:
        result = compute_nohd(
            power_w,
            beam_mm,
            divergence_mrad * MRAD_TO_RAD,
            wavelength,
            exposure_s,
            config=state["config"],
        )
    except (LaserCalcError, ValueError, TypeError) as exc:
        st.error(t("errors.calc_failed", error=exc))
        return

    nohd_text = "∞" if math.isinf(result.nohd_m) else f"{result.nohd_m:.2f} m"
    cols = st.columns(3)
    cols[0].metric(t("nohd.nohd"), nohd_text)
    cols[1].metric(t("nohd.mpe"), str(result.mpe))
    cols[2].metric(t("nohd.initial_density"), str(result.initial_power_density))

    if math.isinf(result.nohd_m) or result.nohd_m >= 3:
        st.error(f"{result.hazard_class}: {result.hazard_detail}")
    else:
        st.info(f"{result.hazard_class}: {result.hazard_detail}")

    if not math.isinf(result.nohd_m):
        cols = st.columns(2)
        cols[0].metric(t("nohd.beam_at_nohd"), f"{result.beam_diameter_at_nohd_mm:.1f} mm")
        cols[1].metric(t("nohd.irradiance_at_nohd"), str(result.irradiance_at_nohd))
    steps_expander(t("common.steps"), result.steps)
