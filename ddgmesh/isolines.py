"""Post-processing of distance fields on a mesh."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from .geometry import VertexPositionGeometry


def subtract_minimum_distance(phi: Sequence[float]) -> np.ndarray:
    """Return phi shifted so that its smallest value is zero."""
    values = np.asarray(phi, dtype=float)
    if values.size == 0:
        return values.copy()
    return values - values.min()


def isolines(
    geometry: VertexPositionGeometry,
    solution: Sequence[float],
    spacing: Optional[float] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Level-set segments of a per-vertex scalar, one per face crossed by exactly two levels.

    Levels are the multiples of spacing, which defaults to a twentieth of the
    largest value. Returns the segment end points, shape (2k, 3), and index
    pairs into them, shape (k, 2).
    """
    m = geometry.mesh
    values = np.asarray(solution, dtype=float)
    if values.shape != (m.n_vertices(),):
        raise ValueError(
            f"expected {m.n_vertices()} values, got array of shape {values.shape}"
        )
    if spacing is None:
        spacing = max(0.0, float(values.max())) / 20.0
    if not spacing > 0.0:
        raise ValueError("isoline spacing must be positive")

    positions: list[np.ndarray] = []
    edges: list[tuple[int, int]] = []
    for f in range(m.n_faces()):
        crossings = []
        for he in m.face_halfedges(f):
            vs = values[m.tail(he)]
            vd = values[m.tip(he)]
            region_s = math.floor(vs / spacing)
            region_d = math.floor(vd / spacing)
            if region_s == region_d:
                continue
            level = max(region_s, region_d) * spacing
            t = (level - vs) / (vd - vs)
            ps = geometry.positions[m.tail(he)]
            pd = geometry.positions[m.tip(he)]
            crossings.append(ps + t * (pd - ps))
        if len(crossings) == 2:
            positions.extend(crossings)
            edges.append((len(positions) - 2, len(positions) - 1))

    return (
        np.array(positions, dtype=float).reshape(-1, 3),
        np.array(edges, dtype=int).reshape(-1, 2),
    )