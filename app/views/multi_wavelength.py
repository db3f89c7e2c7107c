from __future__ import annotations

import pandas as pd
import streamlit as st

from app.i18n import t
from app.ui_components import class_chip, steps_expander
from app.validation import validate_laser_rows
from laser_core.errors import LaserCalcError
from laser_core.models import ExposureContext
from laser_core.multi_wavelength import classify_multi
from laser_core.records import spec_from_record

LINE_COLUMNS = [
    "label",
    "wavelength_nm",
    "emission_type",
    "power_W",
    "pulse_energy_J",
    "pulse_width_s",
    "repetition_rate_Hz",
]


def _default_lines() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"label": "green", "wavelength_nm": 532.0, "emission_type": "CW", "power_W": 5e-4},
            {"label": "red", "wavelength_nm": 635.0, "emission_type": "CW", "power_W": 5e-4},
        ],
        columns=LINE_COLUMNS,
    )


def render(state: dict) -> None:
    st.header(t("multi.header"))
    st.caption(t("multi.caption"))

    col1, col2 = st.columns(2)
    beam_mm = col1.number_input(t("form.beam_diameter_mm"), min_value=0.0, value=7.0, key="multi_beam_mm")
    exposure_s = col2.number_input(
        t("form.exposure_time_s"), min_value=0.0, value=0.25, format="%.6g", key="multi_exposure_s"
    )

    lines = st.data_editor(
        _default_lines(),
        num_rows="dynamic",
        use_container_width=True,
        column_config={
            "emission_type": st.column_config.SelectboxColumn(options=["CW", "Pulsed"], required=True),
        },
        key="multi_lines",
    )
    if lines.empty:
        st.info(t("multi.no_lines"))
        return

    rows = lines.copy()
    rows["beam_diameter_mm"] = beam_mm
    rows["exposure_time_s"] = exposure_s
    rows["angular_subtense_mrad"] = state["config"].default_angular_subtense_mrad
    check = validate_laser_rows(rows, translator=t)
    for msg in check.warnings:
        st.warning(msg)
    if check.has_errors:
        for msg in check.errors:
            st.error(msg)
        return

    if not st.button(t("multi.run_btn"), type="primary"):
        return

    config = state["config"]
    try:
        specs = []
        for idx, row in rows.iterrows():
            record = {k: v for k, v in row.to_dict().items() if k != "label"}
            spec, _exposure, _beam = spec_from_record(record, ctx=f"row#{idx}", config=config)
            specs.append(spec)
        exposure = ExposureContext(exposure_s, config.default_angular_subtense_mrad)
        result = classify_multi(specs, exposure, beam_mm, config=config)
    except (LaserCalcError, ValueError, TypeError) as exc:
        st.error(t("errors.calc_failed", error=exc))
        return

    class_chip(t("classification.result"), result.laser_class, t=t)
    st.write(t("multi.method", method=t(f"multi.method_{result.method}")))
    if result.additive_group is not None:
        st.write(t("multi.group", group=result.additive_group.name))
    if result.sum_condition1 is not None:
        cols = st.columns(2)
        cols[0].metric(t("multi.sum_c1"), f"{result.sum_condition1:.4f}")
        cols[1].metric(t("multi.sum_c3"), f"{result.sum_condition3:.4f}")
    if result.individual:
        st.dataframe(
            pd.DataFrame(
                [
                    {"label": label, t("classification.result"): r.laser_class.value}
                    for label, r in zip(rows["label"], result.individual)
                ]
            ),
            hide_index=True,
            use_container_width=True,
        )
    steps_expander(t("common.steps"), result.steps)
