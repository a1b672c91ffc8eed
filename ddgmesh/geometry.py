"""Geometric quantities of a mesh with vertex positions in 3D."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from .mesh import SurfaceMesh

_EPS = 1e-10


def _normalized_or_zero(vec: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(vec))
    if length < _EPS:
        return np.zeros(3)
    return vec / length


def _angle_between(a: np.ndarray, b: np.ndarray) -> Optional[float]:
    """Unsigned angle between two vectors, or None if either is degenerate."""
    la = float(np.linalg.norm(a))
    lb = float(np.linalg.norm(b))
    if la < _EPS or lb < _EPS:
        return None
    cos_theta = float(np.dot(a / la, b / lb))
    return math.acos(max(-1.0, min(1.0, cos_theta)))


def _cotan_from_cos(cos_theta: float) -> float:
    cos_theta = max(-1.0, min(1.0, cos_theta))
    sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)
    return 0.0 if sin_theta < _EPS else cos_theta / sin_theta


class VertexPositionGeometry:
    """A surface mesh together with one 3D position per vertex."""

    def __init__(self, mesh: SurfaceMesh, positions: Sequence[Sequence[float]]):
        coords = np.array(positions, dtype=float)
        if coords.shape != (mesh.n_vertices(), 3):
            raise ValueError(
                f"expected positions of shape ({mesh.n_vertices()}, 3), got {coords.shape}"
            )
        self.mesh = mesh
        self.positions = coords

    # -- basic quantities -------------------------------------------------

    def euler_characteristic(self) -> int:
        m = self.mesh
        return m.n_vertices() - m.n_edges() + m.n_faces()

    def halfedge_vector(self, he: int) -> np.ndarray:
        m = self.mesh
        return self.positions[m.tip(he)] - self.positions[m.tail(he)]

    def edge_length(self, e: int) -> float:
        return float(np.linalg.norm(self.halfedge_vector(self.mesh.edge_halfedge(e))))

    def _vector_area(self, f: int) -> np.ndarray:
        pts = self.positions[self.mesh.face_vertices(f)]
        return 0.5 * np.cross(pts, np.roll(pts, -1, axis=0)).sum(axis=0)

    def face_area(self, f: int) -> float:
        return float(np.linalg.norm(self._vector_area(f)))

    def face_normal(self, f: int) -> np.ndarray:
        """Unit normal of a face, oriented by its vertex order; zero if degenerate."""
        return _normalized_or_zero(self._vector_area(f))

    def mean_edge_length(self) -> float:
        total = sum(self.edge_length(e) for e in range(self.mesh.n_edges()))
        return total / self.mesh.n_edges()

    def total_area(self) -> float:
        return sum(self.face_area(f) for f in range(self.mesh.n_faces()))

    # -- per-face helpers -----------------------------------------------

    def _triangle(self, f: int) -> Optional[list[int]]:
        verts = self.mesh.face_vertices(f)
        return verts if len(verts) == 3 else None

    def _corner_edges(self, verts: list[int], v: int) -> tuple[np.ndarray, np.ndarray]:
        """Vectors from v to its previous and next neighbours in a face."""
        i = verts.index(v)
        p = self.positions[v]
        prev = self.positions[verts[i - 1]]
        nxt = self.positions[verts[(i + 1) % len(verts)]]
        return prev - p, nxt - p

    def _triangle_normal(self, verts: list[int]) -> tuple[np.ndarray, float]:
        a, b, c = self.positions[verts]
        n = np.cross(b - a, c - a)
        return n, float(np.linalg.norm(n))

    def _cotan_at(self, f: Optional[int], v: int) -> float:
        if f is None:
            return 0.0
        prev, nxt = self._corner_edges(self.mesh.face_vertices(f), v)
        lp = float(np.linalg.norm(prev))
        ln = float(np.linalg.norm(nxt))
        if lp < _EPS or ln < _EPS:
            return 0.0
        return _cotan_from_cos(float(np.dot(prev / lp, nxt / ln)))

    # -- areas and angles -----------------------------------------------

    def barycentric_dual_area(self, v: int) -> float:
        """One third of the area of each triangle around v."""
        area = 0.0
        for f in self.mesh.adjacent_faces(v):
            verts = self._triangle(f)
            if verts is None:
                continue
            _, magnitude = self._triangle_normal(verts)
            area += 0.5 * magnitude / 3.0
        return area

    def angle(self, he: int) -> float:
        """Interior angle at the tail of a halfedge, in [0, pi]."""
        m = self.mesh
        if not m.is_interior(he):
            raise ValueError(f"halfedge {he} is exterior and has no corner")
        h1 = m.next(he)
        p0 = self.positions[m.tail(he)]
        p1 = self.positions[m.tail(h1)]
        p2 = self.positions[m.tail(m.next(h1))]
        theta = _angle_between(p1 - p0, p2 - p0)
        return 0.0 if theta is None else theta

    def dihedral_angle(self, he: int) -> float:
        """Signed angle between the faces on either side of the edge of he; 0 on the boundary."""
        m = self.mesh
        h = m.edge_halfedge(m.edge(he))
        t = m.twin(h)
        if not m.is_interior(h) or not m.is_interior(t):
            return 0.0
        n1 = self.face_normal(m.face(h))
        n2 = self.face_normal(m.face(t))
        direction = _normalized_or_zero(self.halfedge_vector(h))
        return math.atan2(float(np.dot(direction, np.cross(n1, n2))), float(np.dot(n1, n2)))

    def circumcentric_dual_area(self, v: int) -> float:
        area = 0.0
        for f in self.mesh.adjacent_faces(v):
            verts = self._triangle(f)
            if verts is None:
                continue
            prev, nxt = self._corner_edges(verts, v)
            lp = float(np.linalg.norm(prev))
            ln = float(np.linalg.norm(nxt))
            if lp < _EPS or ln < _EPS:
                continue
            cot = _cotan_from_cos(float(np.dot(prev / lp, nxt / ln)))
            area += (lp * lp + ln * ln) * cot / 8.0
        return max(area, 0.0)

    # -- vertex normals -------------------------------------------------

    def vertex_normal_angle_weighted(self, v: int) -> np.ndarray:
        normal = np.zeros(3)
        for f in self.mesh.adjacent_faces(v):
            verts = self._triangle(f)
            if verts is None:
                continue
            face_n, magnitude = self._triangle_normal(verts)
            if magnitude < _EPS:
                continue
            theta = _angle_between(*self._corner_edges(verts, v))
            if theta is None:
                continue
            normal += face_n / magnitude * theta
        return _normalized_or_zero(normal)

    def vertex_normal_sphere_inscribed(self, v: int) -> np.ndarray:
        m = self.mesh
        # The ring walked is that of halfedges entering the tip of v's halfedge.
        start = m.vertex_halfedge(v)
        ring = [start]
        h = m.twin(m.next(start))
        while h != start:
            ring.append(h)
            h = m.twin(m.next(h))

        vectors = [self.halfedge_vector(h) for h in ring]
        lengths = [float(np.linalg.norm(vec)) for vec in vectors]
        if any(length < _EPS for length in lengths):
            return np.zeros(3)

        normal = np.zeros(3)
        for i, (vec, length) in enumerate(zip(vectors, lengths)):
            j = (i + 1) % len(vectors)
            weight = 1.0 / (length * length * lengths[j] * lengths[j])
            normal += np.cross(vec, vectors[j]) * weight
        return _normalized_or_zero(normal)

    def vertex_normal_area_weighted(self, v: int) -> np.ndarray:
        normal = np.zeros(3)
        for f in self.mesh.adjacent_faces(v):
            verts = self._triangle(f)
            if verts is None:
                continue
            face_n, magnitude = self._triangle_normal(verts)
            if magnitude < _EPS:
                continue
            normal += face_n / magnitude * (0.5 * magnitude)
        return _normalized_or_zero(normal)

    def vertex_normal_mean_curvature(self, v: int) -> np.ndarray:
        """Cotangent-weighted edge sum, unit length then scaled by 0.5 / circumcentric dual area."""
        dual_area = self.circumcentric_dual_area(v)
        if dual_area < _EPS:
            return np.zeros(3)
        m = self.mesh
        normal = np.zeros(3)
        for he in m.outgoing_halfedges(v):
            weight = (self._cotan_at(m.face(he), v) + self._cotan_at(m.face(m.twin(he)), v)) / 2.0
            normal += weight * self.halfedge_vector(he)
        if float(np.linalg.norm(normal)) < _EPS:
            return np.zeros(3)
        return _normalized_or_zero(normal) * (0.5 / dual_area)

    # -- curvature ------------------------------------------------------

    def angle_defect(self, v: int) -> float:
        angle_sum = 0.0
        for f in self.mesh.adjacent_faces(v):
            verts = self._triangle(f)
            if verts is None:
                continue
            theta = _angle_between(*self._corner_edges(verts, v))
            if theta is not None:
                angle_sum += theta
        return 2.0 * math.pi - angle_sum

    def total_angle_defect(self) -> float:
        return sum(self.angle_defect(v) for v in range(self.mesh.n_vertices()))

    # -- placement ------------------------------------------------------

    def center_of_mass(self) -> np.ndarray:
        return self.positions.mean(axis=0)

    def normalize(self, origin: Sequence[float] = (0.0, 0.0, 0.0), rescale: bool = False) -> None:
        """Center the mesh on origin, scaling it to unit radius if rescale is set."""
        self.positions -= self.center_of_mass()
        if rescale:
            radius = float(np.linalg.norm(self.positions, axis=1).max())
            if radius == 0.0:
                raise ValueError("cannot rescale a mesh of zero radius")
            self.positions /= radius
        self.positions += np.asarray(origin, dtype=float)