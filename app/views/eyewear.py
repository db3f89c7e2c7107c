from __future__ import annotations

import streamlit as st

from app.i18n import t
from app.ui_components import steps_expander
from app.validation import validate_laser_inputs
from app.views.laser_form import laser_inputs
from laser_core.errors import LaserCalcError
from laser_core.eyewear import compute_eyewear_od
from laser_core.records import spec_from_record


def render(state: dict) -> None:
    st.header(t("eyewear.header"))
    st.caption(t("eyewear.caption"))

    record = laser_inputs("eye", state, auto_time_base=False)
    errors, warnings = validate_laser_inputs(record, translator=t)
    for msg in warnings:
        st.warning(msg)
    if errors:
        for msg in errors:
            st.error(msg)
        return

    config = state["config"]
    try:
        spec, exposure, _beam = spec_from_record(record, config=config)
        result = compute_eyewear_od(spec, exposure, config=config)
    except (LaserCalcError, ValueError, TypeError) as exc:
        st.error(t("errors.calc_failed", error=exc))
        return

    cols = st.columns(3)
    cols[0].metric(t("eyewear.required_od"), f"{result.required_od:.2f}")
    cols[1].metric(t("eyewear.od_rating"), f"OD {result.od_rating}")
    cols[2].metric(t("eyewear.marking"), result.en207_marking)

    cols = st.columns(3)
    cols[0].metric(t("eyewear.exposure_level"), str(result.exposure_level))
    cols[1].metric(t("eyewear.mpe"), str(result.mpe))
    cols[2].metric(t("eyewear.dir_rating"), result.dir_rating)

    if result.required_od == 0:
        st.success(t("eyewear.not_required"))

    st.subheader(t("eyewear.recommendations"))
    for item in result.recommendations:
        st.markdown(f"- {item}")
    steps_expander(t("common.steps"), result.steps)
