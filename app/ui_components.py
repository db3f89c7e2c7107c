from __future__ import annotations

from typing import Callable

import streamlit as st

from laser_core.classifier import class_description
from laser_core.models import LaserClass

_CLASS_COLORS = {
    LaserClass.CLASS_1: "#1f7a3a",
    LaserClass.CLASS_1M: "#2f855a",
    LaserClass.CLASS_2: "#b7791f",
    LaserClass.CLASS_2M: "#b45309",
    LaserClass.CLASS_3R: "#c05621",
    LaserClass.CLASS_3B: "#b91c1c",
    LaserClass.CLASS_4: "#7f1d1d",
}


def class_style(laser_class: LaserClass | str) -> tuple[str, str]:
    """
    Returns (bg_color, fg_color) for a class pill.
    Colors are chosen to be readable in both Streamlit light/dark themes.
    """
    try:
        cls = LaserClass(laser_class)
    except ValueError:
        return "#374151", "white"
    return _CLASS_COLORS[cls], "white"


def class_chip(
    label: str,
    laser_class: LaserClass | str,
    *,
    show_description: bool = True,
    t: Callable[..., str] | None = None,
) -> None:
    """Compact coloured chip for a laser class, with the class description as tooltip."""
    cls = LaserClass(laser_class)
    bg, fg = class_style(cls)
    title = class_description(cls).replace('"', "'")
    class_label = t(f"class.{cls.name.lower()}") if t else cls.value

    st.markdown(
        f"""
        <span title="{title}" style="
          display:inline-block;
          padding:0.15rem 0.55rem;
          border-radius:999px;
          background:{bg};
          color:{fg};
          font-weight:600;
          font-size:0.95rem;
          line-height:1.4;
          white-space:nowrap;
        ">{label}: {class_label}</span>
        """,
        unsafe_allow_html=True,
    )
    if show_description:
        st.caption(title)


def steps_expander(title: str, steps: list[str], *, expanded: bool = False) -> None:
    with st.expander(title, expanded=expanded):
        st.code("\n".join(steps), language=None)
