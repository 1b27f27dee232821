"""IO helpers for pointer gesture traces and vertex tables."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Dict, Iterable, List, Mapping, Union

import pandas as pd

from controls import PointerEvent, PointerPhase
from geom import Polygon

PathLike = Union[str, Path]
FileLike = Union[IO[str], IO[bytes]]

EVENT_COLUMNS = ("phase", "x", "y")


def read_csv(path_or_file: Union[PathLike, FileLike]) -> pd.DataFrame:
    """Load a gesture trace, trimming header whitespace left by hand-edited files."""

    try:
        trace = pd.read_csv(path_or_file, skipinitialspace=True)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Gesture trace not found: {path_or_file}.") from exc
    except Exception as exc:  # pragma: no cover - pandas composes different errors
        raise ValueError(f"Failed to read gesture trace: {exc}") from exc

    if trace.empty:
        raise ValueError("Gesture trace has no events. Record a gesture before importing.")
    trace.columns = [str(column).strip() for column in trace.columns]
    return trace


_PHASE_TOKENS: Dict[str, PointerPhase] = {
    **dict.fromkeys(("press", "down", "action_down", "0"), PointerPhase.PRESS),
    **dict.fromkeys(("move", "drag", "action_move", "2"), PointerPhase.MOVE),
    **dict.fromkeys(("release", "up", "action_up", "1"), PointerPhase.RELEASE),
}


def _normalise_phase(value: object) -> str:
    """Convert host-specific phase names or action codes into a phase value."""

    text = str(value).strip().lower()
    phase = _PHASE_TOKENS.get(text)
    if phase is None:
        raise ValueError(f"Phase value '{value}' is not recognised as press, move or release.")
    return phase.value


def normalize_columns(df: pd.DataFrame, mapping: Mapping[str, str]) -> pd.DataFrame:
    """Rename and validate event columns based on the provided mapping."""

    missing_targets = set(EVENT_COLUMNS).difference(mapping.keys())
    if missing_targets:
        raise ValueError(f"Missing mappings for: {', '.join(sorted(missing_targets))}.")

    rename_map: Dict[str, str] = {}
    for target in EVENT_COLUMNS:
        source = mapping[target]
        if source not in df.columns:
            raise ValueError(f"Source column '{source}' not found in the imported data.")
        if source in rename_map:
            raise ValueError(
                f"Source column '{source}' is mapped to both "
                f"'{rename_map[source]}' and '{target}'."
            )
        rename_map[source] = target

    # Unmapped columns already named like a target would duplicate it after renaming.
    shadowed = [
        column
        for column in df.columns
        if column in EVENT_COLUMNS and column not in rename_map
    ]
    normalized = df.drop(columns=shadowed).rename(columns=rename_map).copy()

    for coordinate in ("x", "y"):
        normalized[coordinate] = pd.to_numeric(normalized[coordinate], errors="coerce")
        if normalized[coordinate].isna().any():
            raise ValueError(
                f"Column '{coordinate}' contains non-numeric values after conversion."
            )

    normalized["phase"] = normalized["phase"].apply(_normalise_phase)
    return normalized


def events_from_frame(df: pd.DataFrame) -> List[PointerEvent]:
    """Turn a normalised trace into pointer events, in row order."""

    return [
        PointerEvent(PointerPhase(row["phase"]), float(row["x"]), float(row["y"]))
        for _, row in df.iterrows()
    ]


def events_to_frame(events: Iterable[PointerEvent]) -> pd.DataFrame:
    return pd.DataFrame(
        [(event.phase.value, event.x, event.y) for event in events],
        columns=list(EVENT_COLUMNS),
    )


def vertices_frame(polygon: Polygon) -> pd.DataFrame:
    """Tabulate the polygon's current vertex coordinates."""

    return pd.DataFrame(
        {
            "vertex": range(len(polygon)),
            "x": [vertex.x for vertex in polygon],
            "y": [vertex.y for vertex in polygon],
        }
    )


def write_csv(trace: pd.DataFrame) -> bytes:
    """Encode a trace as UTF-8 CSV with the event columns first."""

    leading = [column for column in EVENT_COLUMNS if column in trace.columns]
    ordered = trace[leading + [c for c in trace.columns if c not in leading]]
    return ordered.to_csv(index=False, lineterminator="\n").encode("utf-8")
