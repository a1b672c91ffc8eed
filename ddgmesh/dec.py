"""Discrete exterior calculus operators built on a triangle mesh."""

from __future__ import annotations

import numpy as np
import scipy.sparse as sp

from .geometry import VertexPositionGeometry

_EPS = 1e-10


def _diagonal(values: np.ndarray) -> sp.csr_matrix:
    return sp.diags(np.asarray(values, dtype=float), 0, format="csr")


def hodge_star_0_form(geometry: VertexPositionGeometry) -> sp.csr_matrix:
    """Diagonal Hodge star on primal 0-forms: barycentric dual area per vertex."""
    n = geometry.mesh.n_vertices()
    return _diagonal([geometry.barycentric_dual_area(v) for v in range(n)])


def _opposite_cotan(geometry: VertexPositionGeometry, he: int) -> float:
    """Cotangent of the angle opposite a halfedge inside its face."""
    m = geometry.mesh
    p0 = geometry.positions[m.tail(he)]
    p1 = geometry.positions[m.tip(he)]
    opposite = geometry.positions[m.tail(m.next(m.next(he)))]
    a = p0 - opposite
    b = p1 - opposite
    return float(np.dot(a, b)) / float(np.linalg.norm(np.cross(a, b)))


def hodge_star_1_form(geometry: VertexPositionGeometry) -> sp.csr_matrix:
    """Diagonal Hodge star on primal 1-forms: half the sum of opposite cotangents per edge."""
    m = geometry.mesh
    values = []
    for e in range(m.n_edges()):
        h = m.edge_halfedge(e)
        cot_sum = sum(
            _opposite_cotan(geometry, side)
            for side in (h, m.twin(h))
            if m.is_interior(side)
        )
        values.append(cot_sum / 2.0)
    return _diagonal(values)


def hodge_star_2_form(geometry: VertexPositionGeometry) -> sp.csr_matrix:
    """Diagonal Hodge star on primal 2-forms: reciprocal face area.

    Non-triangular and degenerate faces get a zero entry.
    """
    m = geometry.mesh
    values = np.zeros(m.n_faces())
    for f in range(m.n_faces()):
        verts = m.face_vertices(f)
        if len(verts) != 3:
            continue
        a, b, c = geometry.positions[verts]
        area = 0.5 * float(np.linalg.norm(np.cross(b - a, c - a)))
        if area < _EPS:
            continue
        values[f] = 1.0 / area
    return _diagonal(values)


def exterior_derivative_0_form(geometry: VertexPositionGeometry) -> sp.csr_matrix:
    """Edge-by-vertex matrix: +1 at the tail, -1 at the tip of each edge's halfedge."""
    m = geometry.mesh
    rows, cols, vals = [], [], []
    for e in range(m.n_edges()):
        h = m.edge_halfedge(e)
        rows += [e, e]
        cols += [m.tail(h), m.tip(h)]
        vals += [1.0, -1.0]
    return sp.csr_matrix((vals, (rows, cols)), shape=(m.n_edges(), m.n_vertices()))


def exterior_derivative_1_form(geometry: VertexPositionGeometry) -> sp.csr_matrix:
    """Face-by-edge matrix: +1 where the face boundary agrees with the edge direction, else -1."""
    m = geometry.mesh
    rows, cols, vals = [], [], []
    for f in range(m.n_faces()):
        for he in m.face_halfedges(f):
            e = m.edge(he)
            rows.append(f)
            cols.append(e)
            vals.append(1.0 if m.edge_halfedge(e) == he else -1.0)
    return sp.csr_matrix((vals, (rows, cols)), shape=(m.n_faces(), m.n_edges()))


def sparse_inverse_diagonal(matrix: sp.spmatrix) -> sp.csr_matrix:
    """Inverse of a square diagonal matrix, taken entry by entry."""
    rows, cols = matrix.shape
    if rows != cols:
        raise ValueError(f"matrix must be square, got shape {matrix.shape}")
    diagonal = np.asarray(matrix.diagonal(), dtype=float)
    zero = np.flatnonzero(diagonal == 0.0)
    if zero.size:
        raise ValueError(f"diagonal has zero entries at {zero.tolist()}")
    return _diagonal(1.0 / diagonal)