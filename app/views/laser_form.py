"""Shared laser parameter form used by the classification and eyewear pages."""
from __future__ import annotations

from typing import Any

import streamlit as st

from app.i18n import t
from laser_core.models import LaserClass
from laser_core.wavelength import classification_time_base

DEFAULTS: dict[str, Any] = {
    "wavelength_nm": 532.0,
    "emission_type": "CW",
    "power_W": 5e-3,
    "pulse_energy_J": 5e-5,
    "pulse_width_s": 1e-8,
    "repetition_rate_Hz": 1000.0,
    "beam_diameter_mm": 7.0,
    "exposure_time_s": 0.25,
    "angular_subtense_mrad": 1.5,
}


def laser_inputs(prefix: str, state, *, auto_time_base: bool = True) -> dict[str, Any]:
    """Render the laser form and return a LaserSpec-shaped record."""
    record: dict[str, Any] = {}
    col1, col2 = st.columns(2)
    with col1:
        record["wavelength_nm"] = st.number_input(
            t("form.wavelength_nm"),
            min_value=180.0,
            max_value=1e6,
            value=DEFAULTS["wavelength_nm"],
            key=f"{prefix}_wavelength_nm",
        )
        record["emission_type"] = st.radio(
            t("form.emission_type"),
            ["CW", "Pulsed"],
            format_func=lambda x: t("form.cw") if x == "CW" else t("form.pulsed"),
            horizontal=True,
            key=f"{prefix}_emission_type",
        )
        if record["emission_type"] == "CW":
            record["power_W"] = st.number_input(
                t("form.power_w"),
                min_value=0.0,
                value=DEFAULTS["power_W"],
                format="%.6g",
                key=f"{prefix}_power_w",
            )
        else:
            record["pulse_energy_J"] = st.number_input(
                t("form.pulse_energy_j"),
                min_value=0.0,
                value=DEFAULTS["pulse_energy_J"],
                format="%.6g",
                key=f"{prefix}_pulse_energy_j",
            )
            record["pulse_width_s"] = st.number_input(
                t("form.pulse_width_s"),
                min_value=0.0,
                value=DEFAULTS["pulse_width_s"],
                format="%.3e",
                key=f"{prefix}_pulse_width_s",
            )
            record["repetition_rate_Hz"] = st.number_input(
                t("form.repetition_rate_hz"),
                min_value=0.0,
                value=DEFAULTS["repetition_rate_Hz"],
                format="%.6g",
                help=t("form.repetition_rate_help"),
                key=f"{prefix}_repetition_rate_hz",
            )
    with col2:
        record["beam_diameter_mm"] = st.number_input(
            t("form.beam_diameter_mm"),
            min_value=0.0,
            value=DEFAULTS["beam_diameter_mm"],
            key=f"{prefix}_beam_diameter_mm",
        )
        record["angular_subtense_mrad"] = st.number_input(
            t("form.angular_subtense_mrad"),
            min_value=0.0,
            value=float(state.get("default_angular_subtense_mrad", DEFAULTS["angular_subtense_mrad"])),
            key=f"{prefix}_angular_subtense_mrad",
        )
        use_auto = False
        if auto_time_base:
            use_auto = st.checkbox(t("form.auto_time_base"), value=True, key=f"{prefix}_auto_time_base")
        if use_auto:
            # the classifier picks each class's own time base; exposure_time_s keeps the general one
            general = classification_time_base(record["wavelength_nm"])
            aversion = classification_time_base(record["wavelength_nm"], LaserClass.CLASS_2)
            if aversion == general:
                st.caption(t("form.auto_time_base_value", seconds=f"{general:g}"))
            else:
                st.caption(
                    t("form.auto_time_base_per_class", aversion=f"{aversion:g}", general=f"{general:g}")
                )
            record["exposure_time_s"] = general
            record["auto_time_base"] = True
        else:
            record["exposure_time_s"] = st.number_input(
                t("form.exposure_time_s"),
                min_value=0.0,
                value=DEFAULTS["exposure_time_s"],
                format="%.6g",
                key=f"{prefix}_exposure_time_s",
            )
    return record
