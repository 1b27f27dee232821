"""Streamlit app for editing a polygon region overlaid on an image."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import matplotlib.pyplot as plt
import streamlit as st
from PIL import Image

from components import render_event_form, render_vertex_table, sidebar_attributes
from controls import PointerEvent
from geom import Polygon
from storage import (
    EVENT_COLUMNS,
    events_from_frame,
    events_to_frame,
    normalize_columns,
    read_csv,
    write_csv,
)
from view import FloorPlannerView

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = (400, 400)
BLANK_CANVAS_COLOR = "#f0f0f0"

st.set_page_config(page_title="Floor Planner", layout="wide")
st.title("Floor Planner")


def log_coordinates(polygon: Polygon) -> None:
    """Coordinates listener attached to every view created by the app."""

    logger.info("New vertex coordinates => %s", [str(vertex) for vertex in polygon])


def create_view(image: Image.Image, attributes: Dict[str, Any]) -> FloorPlannerView:
    width, height = image.size
    view = FloorPlannerView.from_attributes(width, height, attributes)
    view.on_coordinates_updated = log_coordinates
    logger.info("Initial vertex coordinates => %s", [str(vertex) for vertex in view.vertices])
    return view


def load_image() -> Optional[Image.Image]:
    """Return the uploaded image, or a blank canvas of the chosen size."""

    uploaded_file = st.file_uploader("Image", type=["png", "jpg", "jpeg"])
    if uploaded_file is not None:
        try:
            return Image.open(uploaded_file).convert("RGB")
        except Exception as exc:  # pragma: no cover - Streamlit runtime feedback
            st.error(f"Could not open image: {exc}")
            return None

    width_col, height_col = st.columns(2)
    width = width_col.number_input("Canvas width", min_value=1, value=DEFAULT_CANVAS_SIZE[0])
    height = height_col.number_input("Canvas height", min_value=1, value=DEFAULT_CANVAS_SIZE[1])
    return Image.new("RGB", (int(width), int(height)), BLANK_CANVAS_COLOR)


def init_session_state() -> None:
    if "view" not in st.session_state:
        st.session_state["view"] = None
    if "image_size" not in st.session_state:
        st.session_state["image_size"] = None
    if "trace" not in st.session_state:
        st.session_state["trace"] = []
    if "replay_df" not in st.session_state:
        st.session_state["replay_df"] = None


def show_overlay(view: FloorPlannerView, image: Image.Image) -> None:
    fig = view.render(image)
    st.pyplot(fig)
    plt.close(fig)


def render_editor(attributes: Dict[str, Any]) -> None:
    """Render the overlay, the pointer event form and the recorded trace."""

    st.subheader("Editor")
    image = load_image()
    if image is None:
        return

    reset = st.button("Reset polygon")
    view: Optional[FloorPlannerView] = st.session_state["view"]
    if reset or view is None or st.session_state["image_size"] != image.size:
        view = create_view(image, attributes)
        st.session_state["view"] = view
        st.session_state["image_size"] = image.size
        st.session_state["trace"] = []
    else:
        view.resize(*image.size)
    view.update_attributes(attributes)

    event = render_event_form(*image.size)
    if event is not None:
        view.on_touch_event(event)
        st.session_state["trace"].append(event)

    overlay_col, table_col = st.columns((3, 2))
    with overlay_col:
        show_overlay(view, image)
    with table_col:
        render_vertex_table(view.polygon)
        st.caption(f"Drag state: {view.controls.state.value}")

    trace: List[PointerEvent] = st.session_state["trace"]
    if not trace:
        st.info("No pointer events yet. Press, move and release with the form above.")
        return

    st.markdown("#### Recorded gesture")
    trace_df = events_to_frame(trace)
    st.dataframe(trace_df, hide_index=True)
    st.download_button(
        label="Download gesture CSV",
        data=write_csv(trace_df),
        file_name="gesture.csv",
        mime="text/csv",
    )


def render_replay(attributes: Dict[str, Any]) -> None:
    """Import a gesture CSV, map its columns and replay it on a fresh polygon."""

    st.subheader("Replay")
    uploaded_file = st.file_uploader("Gesture CSV", type=["csv"])
    if uploaded_file is not None:
        try:
            st.session_state["replay_df"] = read_csv(uploaded_file)
        except Exception as exc:  # pragma: no cover - Streamlit runtime feedback
            st.error(f"Read error: {exc}")

    source_df = st.session_state.get("replay_df")
    if source_df is None:
        st.warning("Upload a gesture CSV recorded in the editor or by a host app.")
        return

    st.dataframe(source_df.head())

    with st.form("replay_mapping_form"):
        mapping: Dict[str, str] = {}
        columns = source_df.columns.tolist()
        for target in EVENT_COLUMNS:
            index = columns.index(target) if target in columns else 0
            mapping[target] = st.selectbox(f"{target} column", columns, index=index)
        width_col, height_col = st.columns(2)
        width = width_col.number_input("Container width", min_value=1, value=DEFAULT_CANVAS_SIZE[0])
        height = height_col.number_input("Container height", min_value=1, value=DEFAULT_CANVAS_SIZE[1])
        submitted = st.form_submit_button("Replay")

    if not submitted:
        return

    try:
        events = events_from_frame(normalize_columns(source_df, mapping))
    except ValueError as exc:
        st.error(f"Mapping error: {exc}")
        return

    image = Image.new("RGB", (int(width), int(height)), BLANK_CANVAS_COLOR)
    view = create_view(image, attributes)
    for event in events:
        view.on_touch_event(event)

    st.success(f"Replayed {len(events)} events.")
    overlay_col, table_col = st.columns((3, 2))
    with overlay_col:
        show_overlay(view, image)
    with table_col:
        render_vertex_table(view.polygon)


def main() -> None:
    """Application entry point."""

    init_session_state()
    attributes = sidebar_attributes()
    page = st.selectbox("Page", ("Editor", "Replay"))

    if page == "Editor":
        render_editor(attributes)
    else:
        render_replay(attributes)


if __name__ == "__main__":
    main()
