"""
Functions for handing layout results to downstream consumers.
"""

import os
import json

import pandas as pd

from ..layout.coordinates import VertexCoordinate

__all__ = ["coordinates_to_dataframe", "history_to_dataframe", "export_coordinates", "load_coordinates"]


def _columns(dimensions):
    return [f"x{d}" for d in range(dimensions)]


def coordinates_to_dataframe(coords):
    """
    Convert vertex coordinates to a DataFrame.

    Parameters
    ----------
    coords : list of VertexCoordinate
        Coordinates of one layout

    Returns
    -------
    DataFrame
        One row per vertex with columns ``vertex, x0, ..., xn``
    """
    dimensions = coords[0].dimensions if coords else 0
    rows = [[c.vertex, *c.positions] for c in coords]
    return pd.DataFrame(rows, columns=['vertex'] + _columns(dimensions))


def history_to_dataframe(history):
    """
    Convert a layout history to a long-format DataFrame.

    Parameters
    ----------
    history : list of list of VertexCoordinate
        Coordinates after every iteration

    Returns
    -------
    DataFrame
        Columns ``iteration, vertex, x0, ..., xn``; iterations count from 1
    """
    frames = []
    for iteration, coords in enumerate(history, start=1):
        df = coordinates_to_dataframe(coords)
        df.insert(0, 'iteration', iteration)
        frames.append(df)

    if not frames:
        return pd.DataFrame(columns=['iteration', 'vertex'])
    return pd.concat(frames, ignore_index=True)


def export_coordinates(coords, filepath):
    """
    Export vertex coordinates to a file.

    Parameters
    ----------
    coords : list of VertexCoordinate
        Coordinates to export
    filepath : str
        Path to the output file; the format follows from the extension,
        ``.csv`` or ``.json``

    Raises
    ------
    ValueError
        If the extension is not supported
    """
    _, ext = os.path.splitext(filepath)
    ext = ext.lower()
    if ext not in ('.csv', '.json'):
        raise ValueError(f"Unsupported file format: {ext}")

    # Create directory if it doesn't exist
    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)

    if ext == '.csv':
        coordinates_to_dataframe(coords).to_csv(filepath, index=False)
    else:
        data = [{'vertex': c.vertex, 'positions': list(c.positions)} for c in coords]
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)


def load_coordinates(filepath):
    """Read coordinates written by :func:`export_coordinates` in JSON format."""
    with open(filepath, 'r') as f:
        data = json.load(f)
    return [VertexCoordinate(item['vertex'], item['positions']) for item in data]
