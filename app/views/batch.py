"""Batch page: classify a table of sources (editable or imported from JSON records)."""
from __future__ import annotations

import json

import pandas as pd
import streamlit as st

from app.i18n import t
from app.validation import validate_laser_rows
from laser_core.classifier import classify
from laser_core.errors import LaserCalcError
from laser_core.export_payload import build_payload, classification_payload
from laser_core.records import RECORD_KEYS, spec_from_record

BATCH_COLUMNS = ["label", *RECORD_KEYS]


def _default_rows() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "label": "green pointer",
                "wavelength_nm": 532.0,
                "emission_type": "CW",
                "power_W": 5e-3,
                "beam_diameter_mm": 7.0,
                "exposure_time_s": 0.25,
            },
            {
                "label": "Nd:YAG",
                "wavelength_nm": 1064.0,
                "emission_type": "Pulsed",
                "pulse_energy_J": 0.1,
                "pulse_width_s": 1e-8,
                "repetition_rate_Hz": 1000.0,
                "beam_diameter_mm": 5.0,
                "exposure_time_s": 10.0,
            },
        ],
        columns=BATCH_COLUMNS,
    )


def _rows_from_upload(raw: bytes) -> pd.DataFrame:
    data = json.loads(raw.decode("utf-8"))
    if isinstance(data, dict):
        data = data.get("records", [data])
    return pd.DataFrame(data, columns=BATCH_COLUMNS)


def render(state: dict) -> None:
    st.header(t("batch.header"))
    st.caption(t("batch.caption"))

    uploaded = st.file_uploader(t("batch.upload"), type=["json"])
    base = _default_rows()
    if uploaded is not None:
        try:
            base = _rows_from_upload(uploaded.getvalue())
        except (ValueError, TypeError) as exc:
            st.error(t("batch.upload_failed", error=exc))

    rows = st.data_editor(base, num_rows="dynamic", use_container_width=True, key="batch_rows")
    check = validate_laser_rows(rows, translator=t)
    for msg in check.warnings:
        st.warning(msg)
    for msg in check.errors:
        st.error(msg)

    if not st.button(t("batch.run_btn"), type="primary"):
        return

    config = state["config"]
    results = []
    payloads = []
    for idx, row in rows.iterrows():
        label = str(row.get("label") or "").strip() or f"row#{idx}"
        if check.row_status.get(idx) != "OK":
            results.append({"label": label, "status": "INVALID"})
            continue
        record = {k: v for k, v in row.to_dict().items() if k != "label"}
        try:
            spec, exposure, beam = spec_from_record(record, ctx=label, config=config)
            result = classify(spec, exposure, beam, config=config)
        except (LaserCalcError, ValueError, TypeError) as exc:
            results.append({"label": label, "status": "ERROR", "error": str(exc)})
            continue
        results.append(
            {
                "label": label,
                "status": "OK",
                "laser_class": result.laser_class.value,
                "ael": str(result.ael) if result.ael is not None else None,
                "ratio": result.ratio,
                "condition1_test": result.condition1_test,
                "condition3_test": result.condition3_test,
            }
        )
        payloads.append({"label": label, **classification_payload(result)})

    st.dataframe(pd.DataFrame(results), hide_index=True, use_container_width=True)
    st.download_button(
        t("common.download_json"),
        data=json.dumps(build_payload(payloads), ensure_ascii=False, indent=2),
        file_name="laser_batch.json",
        mime="application/json",
    )
