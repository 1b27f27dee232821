"""Reusable Streamlit UI components."""
from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from controls import PointerEvent, PointerPhase
from geom import Polygon
from storage import vertices_frame
from view import ATTRIBUTE_DEFAULTS


def sidebar_attributes() -> Dict[str, Any]:
    """Render the attribute form in the sidebar and return the chosen values."""

    st.sidebar.header("Attributes")
    attributes: Dict[str, Any] = {}

    attributes["width_ratio"] = st.sidebar.slider(
        "Initial width ratio", 0.6, 1.0, float(ATTRIBUTE_DEFAULTS["width_ratio"]), step=0.05
    )
    attributes["height_ratio"] = st.sidebar.slider(
        "Initial height ratio", 0.6, 1.0, float(ATTRIBUTE_DEFAULTS["height_ratio"]), step=0.05
    )
    attributes["marker_radius"] = st.sidebar.number_input(
        "Marker radius", min_value=0, value=int(ATTRIBUTE_DEFAULTS["marker_radius"]), step=1
    )
    attributes["stroke_width"] = st.sidebar.number_input(
        "Stroke width", min_value=0.0, value=float(ATTRIBUTE_DEFAULTS["stroke_width"])
    )
    attributes["box_padding"] = st.sidebar.number_input(
        "Box padding", value=float(ATTRIBUTE_DEFAULTS["box_padding"])
    )
    attributes["extended_touch_radius"] = st.sidebar.number_input(
        "Extended touch radius",
        value=int(ATTRIBUTE_DEFAULTS["extended_touch_radius"]),
        step=1,
    )

    st.sidebar.subheader("Colors")
    attributes["marker_color"] = st.sidebar.color_picker("Marker", "#ff0000")
    attributes["stroke_color"] = st.sidebar.color_picker(
        "Stroke", str(ATTRIBUTE_DEFAULTS["stroke_color"])
    )
    fill = st.sidebar.color_picker("Fill", str(ATTRIBUTE_DEFAULTS["fill_color"])[:7])
    attributes["fill_color"] = f"{fill}5a"

    return attributes


def render_event_form(width: float, height: float) -> Optional[PointerEvent]:
    """Display a single pointer event form and return the submitted event."""

    with st.form("pointer_event_form"):
        st.markdown("#### Pointer event")
        phase_col, x_col, y_col = st.columns(3)
        phase = phase_col.selectbox(
            "Phase", [phase.value for phase in PointerPhase], key="event_phase"
        )
        x = x_col.number_input("x", min_value=0.0, max_value=float(width), value=float(width) / 2)
        y = y_col.number_input("y", min_value=0.0, max_value=float(height), value=float(height) / 2)
        submitted = st.form_submit_button("Send")

    if not submitted:
        return None
    return PointerEvent(PointerPhase(phase), float(x), float(y))


def render_vertex_table(polygon: Polygon) -> None:
    st.markdown("#### Vertices")
    st.dataframe(vertices_frame(polygon), hide_index=True)
