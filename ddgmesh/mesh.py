"""Halfedge connectivity for oriented manifold polygon meshes."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

import numpy as np


class SurfaceMesh:
    """Oriented manifold surface mesh stored as a halfedge structure.

    Elements are plain integer indices. Interior halfedges are numbered face by
    face in the order the faces were given; exterior (boundary) halfedges
    follow them. Each edge is represented by the first halfedge of its pair.
    """

    def __init__(self, faces: Iterable[Sequence[int]]):
        polygons = [tuple(int(i) for i in face) for face in faces]
        if not polygons:
            raise ValueError("a mesh needs at least one face")
        for number, poly in enumerate(polygons):
            if len(poly) < 3:
                raise ValueError(f"face {number} has fewer than three vertices")
            if len(set(poly)) != len(poly):
                raise ValueError(f"face {number} repeats a vertex")
            if min(poly) < 0:
                raise ValueError(f"face {number} has a negative vertex index")

        n_vertices = max(max(poly) for poly in polygons) + 1
        used = {v for poly in polygons for v in poly}
        if len(used) != n_vertices:
            missing = sorted(set(range(n_vertices)) - used)
            raise ValueError(f"vertices not used by any face: {missing}")

        tail: list[int] = []
        nxt: list[int] = []
        face: list[Optional[int]] = []
        face_he: list[int] = []
        directed: dict[tuple[int, int], int] = {}

        for f, poly in enumerate(polygons):
            start = len(tail)
            k = len(poly)
            face_he.append(start)
            for i, v in enumerate(poly):
                key = (v, poly[(i + 1) % k])
                if key in directed:
                    raise ValueError(
                        f"directed edge {key} occurs twice: mesh is non-manifold "
                        "or inconsistently oriented"
                    )
                directed[key] = start + i
                tail.append(v)
                nxt.append(start + (i + 1) % k)
                face.append(f)

        n_interior = len(tail)
        twin = [-1] * n_interior
        exterior_from: dict[int, int] = {}
        exterior_into: set[int] = set()
        for h in range(n_interior):
            u, w = tail[h], tail[nxt[h]]
            opposite = directed.get((w, u))
            if opposite is not None:
                twin[h] = opposite
                continue
            b = len(tail)
            if w in exterior_from or u in exterior_into:
                raise ValueError(f"non-manifold boundary at vertex {w if w in exterior_from else u}")
            exterior_from[w] = b
            exterior_into.add(u)
            tail.append(w)
            nxt.append(-1)
            face.append(None)
            twin.append(h)
            twin[h] = b

        for b in range(n_interior, len(tail)):
            tip = tail[twin[b]]
            following = exterior_from.get(tip)
            if following is None:
                raise ValueError(f"non-manifold boundary at vertex {tip}")
            nxt[b] = following

        edge = [-1] * len(tail)
        edge_he: list[int] = []
        for h in range(len(tail)):
            if edge[h] == -1:
                edge[h] = edge[twin[h]] = len(edge_he)
                edge_he.append(h)

        vertex_he = [-1] * n_vertices
        for h in range(n_interior):
            if vertex_he[tail[h]] == -1:
                vertex_he[tail[h]] = h
        for b in range(n_interior, len(tail)):
            inner = twin[b]
            vertex_he[tail[inner]] = inner

        self._polygons = polygons
        self._tail = tail
        self._next = nxt
        self._twin = twin
        self._face = face
        self._edge = edge
        self._edge_he = edge_he
        self._face_he = face_he
        self._vertex_he = vertex_he
        self._n_interior = n_interior

        outgoing_count = [0] * n_vertices
        for v in tail:
            outgoing_count[v] += 1
        for v in range(n_vertices):
            if len(self.outgoing_halfedges(v)) != outgoing_count[v]:
                raise ValueError(f"vertex {v} is non-manifold")

        seen: set[int] = set()
        loops = 0
        for b in range(n_interior, len(tail)):
            if b in seen:
                continue
            loops += 1
            h = b
            while h not in seen:
                seen.add(h)
                h = nxt[h]
        self._n_boundary_loops = loops

    # -- counts ---------------------------------------------------------

    def n_vertices(self) -> int:
        return len(self._vertex_he)

    def n_edges(self) -> int:
        return len(self._edge_he)

    def n_faces(self) -> int:
        return len(self._face_he)

    def n_halfedges(self) -> int:
        """Number of halfedges, exterior ones included."""
        return len(self._tail)

    def n_boundary_loops(self) -> int:
        return self._n_boundary_loops

    # -- halfedge navigation ---------------------------------------------

    def next(self, he: int) -> int:
        return self._next[he]

    def twin(self, he: int) -> int:
        return self._twin[he]

    def tail(self, he: int) -> int:
        return self._tail[he]

    def tip(self, he: int) -> int:
        return self._tail[self._next[he]]

    def edge(self, he: int) -> int:
        return self._edge[he]

    def face(self, he: int) -> Optional[int]:
        """Face of a halfedge, or None for an exterior halfedge."""
        return self._face[he]

    def is_interior(self, he: int) -> bool:
        return self._face[he] is not None

    # -- element representatives ------------------------------------------

    def edge_halfedge(self, e: int) -> int:
        return self._edge_he[e]

    def face_halfedge(self, f: int) -> int:
        return self._face_he[f]

    def vertex_halfedge(self, v: int) -> int:
        """An outgoing halfedge; on the boundary, the interior one whose twin is exterior."""
        return self._vertex_he[v]

    # -- neighbourhoods -------------------------------------------------

    def face_halfedges(self, f: int) -> list[int]:
        start = self._face_he[f]
        result = [start]
        h = self._next[start]
        while h != start:
            result.append(h)
            h = self._next[h]
        return result

    def face_vertices(self, f: int) -> list[int]:
        return [self._tail[h] for h in self.face_halfedges(f)]

    def outgoing_halfedges(self, v: int) -> list[int]:
        """Halfedges leaving a vertex, exterior ones included, in rotation order."""
        start = self._vertex_he[v]
        result = [start]
        h = self._next[self._twin[start]]
        while h != start:
            result.append(h)
            h = self._next[self._twin[h]]
        return result

    def adjacent_faces(self, v: int) -> list[int]:
        return [self._face[h] for h in self.outgoing_halfedges(v) if self._face[h] is not None]

    def is_boundary_vertex(self, v: int) -> bool:
        return not self.is_interior(self._twin[self._vertex_he[v]])

    def exterior_halfedges(self) -> list[int]:
        return list(range(self._n_interior, len(self._tail)))


def read_obj(path: Union[str, Path]) -> tuple[SurfaceMesh, np.ndarray]:
    """Read vertex positions and faces from a Wavefront OBJ file."""
    positions: list[tuple[float, float, float]] = []
    faces: list[list[int]] = []
    with open(path, encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            tokens = line.split("#", 1)[0].split()
            if not tokens:
                continue
            keyword, args = tokens[0], tokens[1:]
            try:
                if keyword == "v":
                    if len(args) < 3:
                        raise ValueError("vertex needs three coordinates")
                    x, y, z = (float(a) for a in args[:3])
                    positions.append((x, y, z))
                elif keyword == "f":
                    poly = []
                    for token in args:
                        index = int(token.split("/", 1)[0])
                        if index < 0:
                            index += len(positions)
                        else:
                            index -= 1
                        if not 0 <= index < len(positions):
                            raise ValueError(f"vertex index {token} out of range")
                        poly.append(index)
                    faces.append(poly)
            except ValueError as exc:
                raise ValueError(f"{path}:{line_number}: {exc}") from exc
    mesh = SurfaceMesh(faces)
    coords = np.array(positions, dtype=float).reshape(-1, 3)
    if len(coords) != mesh.n_vertices():
        raise ValueError(f"{path}: vertices not used by any face")
    return mesh, coords