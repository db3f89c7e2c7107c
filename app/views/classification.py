from __future__ import annotations

import json

import pandas as pd
import streamlit as st

from app.i18n import t
from app.ui_components import class_chip, steps_expander
from app.validation import validate_laser_inputs
from app.views.laser_form import laser_inputs
from laser_core.classifier import classify
from laser_core.errors import LaserCalcError
from laser_core.export_payload import build_payload, classification_payload
from laser_core.records import spec_from_record, wants_auto_time_base


def _conditions_frame(result) -> pd.DataFrame:
    cond = result.conditions
    rows = [
        {
            t("classification.condition"): t("classification.condition1"),
            t("classification.aperture_mm"): cond.condition1.aperture_mm,
            t("classification.distance_mm"): cond.condition1.distance_mm,
            t("classification.applicable"): cond.is_condition1_applicable,
            t("classification.test"): result.condition1_test,
        },
        {
            t("classification.condition"): t("classification.condition3"),
            t("classification.aperture_mm"): cond.condition3.aperture_mm,
            t("classification.distance_mm"): cond.condition3.distance_mm,
            t("classification.applicable"): True,
            t("classification.test"): result.condition3_test,
        },
    ]
    return pd.DataFrame(rows)


def render(state: dict) -> None:
    st.header(t("classification.header"))
    st.caption(t("classification.caption"))

    record = laser_inputs("cls", state)
    if not st.button(t("classification.run_btn"), type="primary"):
        return

    errors, warnings = validate_laser_inputs(record, translator=t)
    for msg in warnings:
        st.warning(msg)
    if errors:
        for msg in errors:
            st.error(msg)
        return

    config = state["config"]
    try:
        spec, exposure, beam = spec_from_record(record, config=config)
        result = classify(spec, exposure, beam, auto_time_base=wants_auto_time_base(record), config=config)
    except (LaserCalcError, ValueError, TypeError) as exc:
        st.error(t("errors.calc_failed", error=exc))
        return

    class_chip(t("classification.result"), result.laser_class, t=t)
    cols = st.columns(3)
    cols[0].metric(t("classification.ael"), str(result.ael) if result.ael is not None else "—")
    cols[1].metric(t("classification.emission"), str(result.measured_emission))
    cols[2].metric(t("classification.ratio"), f"{result.ratio:.3g}" if result.ratio is not None else "—")
    if result.requires_class_m:
        st.info(t("classification.class_m_note"))

    st.subheader(t("classification.conditions"))
    st.dataframe(_conditions_frame(result), hide_index=True, use_container_width=True)

    st.subheader(t("classification.safety"))
    for item in result.safety_requirements:
        st.markdown(f"- {item}")

    steps_expander(t("common.steps"), result.steps)
    payload = build_payload([classification_payload(result)])
    st.download_button(
        t("common.download_json"),
        data=json.dumps(payload, ensure_ascii=False, indent=2),
        file_name="laser_classification.json",
        mime="application/json",
    )
