"""Sets of vertex, edge and face indices of a mesh."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


def _format(label: str, indices: set[int]) -> str:
    return label + ": " + "".join(f"{i}, " for i in sorted(indices))


@dataclass
class MeshSubset:
    """A selection of mesh elements; equality compares all three sets."""

    vertices: set[int] = field(default_factory=set)
    edges: set[int] = field(default_factory=set)
    faces: set[int] = field(default_factory=set)

    def deep_copy(self) -> MeshSubset:
        return MeshSubset(set(self.vertices), set(self.edges), set(self.faces))

    def add_vertex(self, index: int) -> None:
        self.vertices.add(index)

    def add_vertices(self, indices: Iterable[int]) -> None:
        self.vertices.update(indices)

    def delete_vertex(self, index: int) -> None:
        self.vertices.discard(index)

    def delete_vertices(self, indices: Iterable[int]) -> None:
        self.vertices.difference_update(indices)

    def add_edge(self, index: int) -> None:
        self.edges.add(index)

    def add_edges(self, indices: Iterable[int]) -> None:
        self.edges.update(indices)

    def delete_edge(self, index: int) -> None:
        self.edges.discard(index)

    def delete_edges(self, indices: Iterable[int]) -> None:
        self.edges.difference_update(indices)

    def add_face(self, index: int) -> None:
        self.faces.add(index)

    def add_faces(self, indices: Iterable[int]) -> None:
        self.faces.update(indices)

    def delete_face(self, index: int) -> None:
        self.faces.discard(index)

    def delete_faces(self, indices: Iterable[int]) -> None:
        self.faces.difference_update(indices)

    def add_subset(self, other: MeshSubset) -> None:
        self.add_vertices(other.vertices)
        self.add_edges(other.edges)
        self.add_faces(other.faces)

    def delete_subset(self, other: MeshSubset) -> None:
        self.delete_vertices(other.vertices)
        self.delete_edges(other.edges)
        self.delete_faces(other.faces)

    def format_vertices(self) -> str:
        return _format("Vertices", self.vertices)

    def format_edges(self) -> str:
        return _format("Edges", self.edges)

    def format_faces(self) -> str:
        return _format("Faces", self.faces)