import math

import numpy as np
import pytest
import scipy.sparse as sp

from ddgmesh.dec import (
    exterior_derivative_0_form,
    exterior_derivative_1_form,
    hodge_star_0_form,
    hodge_star_1_form,
    hodge_star_2_form,
    sparse_inverse_diagonal,
)
from ddgmesh.geometry import VertexPositionGeometry
from ddgmesh.mesh import SurfaceMesh


@pytest.fixture
def square():
    mesh = SurfaceMesh([[0, 1, 2], [0, 2, 3]])
    positions = [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]]
    return VertexPositionGeometry(mesh, positions)


@pytest.fixture
def tetrahedron():
    mesh = SurfaceMesh([[0, 2, 1], [0, 3, 2], [0, 1, 3], [1, 2, 3]])
    positions = [[1, 1, 1], [1, -1, -1], [-1, 1, -1], [-1, -1, 1]]
    return VertexPositionGeometry(mesh, positions)


@pytest.fixture
def right_triangle():
    mesh = SurfaceMesh([[0, 1, 2]])
    return VertexPositionGeometry(mesh, [[0, 0, 0], [1, 0, 0], [0, 1, 0]])


def test_d_squared_is_zero(square, tetrahedron):
    for geo in (square, tetrahedron):
        d0 = exterior_derivative_0_form(geo)
        d1 = exterior_derivative_1_form(geo)
        product = (d1 @ d0).toarray()
        assert np.abs(product).max() < 1e-12


def test_d0_shape_and_rows(tetrahedron):
    d0 = exterior_derivative_0_form(tetrahedron).toarray()
    m = tetrahedron.mesh
    assert d0.shape == (m.n_edges(), m.n_vertices())
    assert np.allclose(d0.sum(axis=1), 0.0)
    assert np.allclose(np.sort(d0, axis=1)[:, [0, -1]], [[-1.0, 1.0]] * m.n_edges())


def test_d0_orientation_follows_edge_halfedge(square):
    m = square.mesh
    d0 = exterior_derivative_0_form(square).toarray()
    for e in range(m.n_edges()):
        h = m.edge_halfedge(e)
        assert d0[e, m.tail(h)] == 1.0
        assert d0[e, m.tip(h)] == -1.0


def test_d1_of_gradient_form(square):
    phi = np.array([0.3, -1.2, 2.5, 4.0])
    d0 = exterior_derivative_0_form(square)
    d1 = exterior_derivative_1_form(square)
    assert np.allclose(d1 @ (d0 @ phi), 0.0)


def test_d1_entries_are_unit(tetrahedron):
    d1 = exterior_derivative_1_form(tetrahedron).toarray()
    m = tetrahedron.mesh
    assert d1.shape == (m.n_faces(), m.n_edges())
    assert np.allclose(np.abs(d1).sum(axis=1), 3.0)
    # each interior edge bounds two faces with opposite orientation
    assert np.allclose(d1.sum(axis=0), 0.0)


def test_hodge0_sums_to_total_area(square, tetrahedron):
    for geo in (square, tetrahedron):
        h0 = hodge_star_0_form(geo)
        total = (h0 @ np.ones(geo.mesh.n_vertices())).sum()
        assert total == pytest.approx(geo.total_area())


def test_hodge2_is_reciprocal_area(tetrahedron):
    h2 = hodge_star_2_form(tetrahedron).diagonal()
    areas = np.array([tetrahedron.face_area(f) for f in range(4)])
    assert np.allclose(h2 * areas, 1.0)


def test_hodge2_degenerate_face_is_zero():
    mesh = SurfaceMesh([[0, 1, 2]])
    geo = VertexPositionGeometry(mesh, [[0, 0, 0], [1, 0, 0], [2, 0, 0]])
    assert hodge_star_2_form(geo).diagonal()[0] == 0.0


def test_hodge1_right_triangle(right_triangle):
    m = right_triangle.mesh
    h1 = hodge_star_1_form(right_triangle).diagonal()
    for e in range(m.n_edges()):
        h = m.edge_halfedge(e)
        ends = {m.tail(h), m.tip(h)}
        if ends == {1, 2}:
            assert h1[e] == pytest.approx(0.0, abs=1e-12)
        else:
            assert h1[e] == pytest.approx(0.5)


def test_hodge1_regular_tetrahedron(tetrahedron):
    h1 = hodge_star_1_form(tetrahedron).diagonal()
    assert np.allclose(h1, 1.0 / math.sqrt(3.0))


def test_hodge_matrices_are_diagonal(square):
    for h in (hodge_star_0_form(square), hodge_star_1_form(square), hodge_star_2_form(square)):
        dense = h.toarray()
        assert np.allclose(dense, np.diag(np.diag(dense)))


def test_sparse_inverse_diagonal_round_trip(tetrahedron):
    h0 = hodge_star_0_form(tetrahedron)
    product = (h0 @ sparse_inverse_diagonal(h0)).toarray()
    assert np.allclose(product, np.eye(4))


def test_sparse_inverse_diagonal_rejects_non_square():
    with pytest.raises(ValueError):
        sparse_inverse_diagonal(sp.csr_matrix(np.ones((2, 3))))


def test_sparse_inverse_diagonal_rejects_zero_entry():
    with pytest.raises(ValueError):
        sparse_inverse_diagonal(sp.diags([1.0, 0.0, 2.0]))