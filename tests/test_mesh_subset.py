from ddgmesh.mesh_subset import MeshSubset


def test_empty_subsets_are_equal():
    assert MeshSubset() == MeshSubset()
    assert MeshSubset().vertices == set()


def test_deep_copy_is_independent():
    original = MeshSubset({1, 2}, {3}, {4})
    copy = original.deep_copy()
    assert copy == original
    copy.add_vertex(9)
    copy.add_edge(9)
    copy.add_face(9)
    assert original.vertices == {1, 2}
    assert original.edges == {3}
    assert original.faces == {4}
    assert copy != original


def test_vertex_operations():
    s = MeshSubset()
    s.add_vertex(5)
    s.add_vertices([1, 2, 5])
    assert s.vertices == {1, 2, 5}
    s.delete_vertex(2)
    s.delete_vertex(42)
    assert s.vertices == {1, 5}
    s.delete_vertices([1, 7])
    assert s.vertices == {5}


def test_edge_operations():
    s = MeshSubset()
    s.add_edge(0)
    s.add_edges({3, 4})
    assert s.edges == {0, 3, 4}
    s.delete_edge(3)
    s.delete_edges([0])
    assert s.edges == {4}


def test_face_operations():
    s = MeshSubset()
    s.add_face(8)
    s.add_faces(range(3))
    assert s.faces == {0, 1, 2, 8}
    s.delete_face(8)
    s.delete_faces([0, 1])
    assert s.faces == {2}


def test_add_and_delete_subset_round_trip():
    base = MeshSubset({1}, {2}, {3})
    other = MeshSubset({4, 5}, {6}, {7})
    merged = base.deep_copy()
    merged.add_subset(other)
    assert merged.vertices == {1, 4, 5}
    assert merged.edges == {2, 6}
    assert merged.faces == {3, 7}
    merged.delete_subset(other)
    assert merged == base


def test_equality_ignores_insertion_order():
    a = MeshSubset()
    a.add_vertices([3, 1, 2])
    b = MeshSubset({1, 2, 3}, set(), set())
    assert a == b


def test_format_lists_sorted_indices():
    s = MeshSubset({2, 1}, {7}, set())
    assert s.format_vertices() == "Vertices: 1, 2, "
    assert s.format_edges() == "Edges: 7, "
    assert s.format_faces() == "Faces: "