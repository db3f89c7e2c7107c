from __future__ import annotations

import pandas as pd
import streamlit as st

from app.i18n import t
from laser_core.classifier import class_description, safety_requirements
from laser_core.models import LaserClass


def render(state: dict) -> None:
    st.header(t("overview.header"))
    st.markdown(t("overview.intro"))

    config = state["config"]
    cols = st.columns(3)
    cols[0].metric(t("overview.correction_mode"), config.correction_factor_mode.value)
    cols[1].metric(
        t("overview.pulse_train"), t("common.on") if config.pulse_train_assessment else t("common.off")
    )
    cols[2].metric(t("overview.angular_subtense"), f"{config.default_angular_subtense_mrad:g} mrad")

    st.subheader(t("overview.classes"))
    rows = [
        {
            t("overview.class"): cls.value,
            t("overview.description"): class_description(cls),
            t("overview.requirements"): "; ".join(safety_requirements(cls)),
        }
        for cls in LaserClass
    ]
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
