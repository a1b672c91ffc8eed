# ddgmesh

Discrete differential geometry on polygon meshes, built on NumPy and SciPy.

## Modules

- `ddgmesh.mesh`
  - `SurfaceMesh(faces)` builds an oriented manifold halfedge mesh from a list
    of polygons given as vertex indices. It raises `ValueError` for faces with
    fewer than three vertices, repeated or unused vertices, and non-manifold or
    inconsistently oriented input.
  - Elements are plain integers. Navigation: `next`, `twin`, `tail`, `tip`,
    `edge`, `face` (which is `None` for exterior halfedges) and `is_interior`.
  - Representatives: `edge_halfedge`, `face_halfedge` and `vertex_halfedge`.
  - Neighbourhoods: `face_halfedges`, `face_vertices`, `outgoing_halfedges`,
    `adjacent_faces`, `is_boundary_vertex`, `exterior_halfedges` and
    `n_boundary_loops`.
  - `read_obj(path)` reads a Wavefront OBJ file and returns `(mesh, positions)`,
    where `positions` is an `(n, 3)` NumPy array.
- `ddgmesh.mesh_subset`
  - `MeshSubset` is a dataclass of vertex, edge and face index sets.
  - Methods: `add_*`, `delete_*`, `add_subset`, `delete_subset` and
    `deep_copy`.
  - `format_vertices`, `format_edges` and `format_faces` return listings such
    as `"Vertices: 1, 2, "`.
- `ddgmesh.geometry`
  - `VertexPositionGeometry(mesh, positions)` computes geometric quantities:
    Euler characteristic, halfedge vectors, edge lengths, face areas and
    normals, mean edge length and total area.
  - Angles and areas: corner angles (`angle`), signed dihedral angles (zero on
    the boundary), barycentric and circumcentric dual areas, angle defects and
    total angle defect.
  - Vertex normals: angle-weighted, inscribed-sphere, area-weighted and
    mean-curvature normals.
  - Placement: `center_of_mass` and `normalize(origin, rescale)`.
- `ddgmesh.dec`
  - `hodge_star_0_form`, `hodge_star_1_form` and `hodge_star_2_form` build the
    Hodge stars.
  - `exterior_derivative_0_form` and `exterior_derivative_1_form` build the
    exterior derivatives.
  - All of them return SciPy CSR matrices.
  - `sparse_inverse_diagonal` inverts a diagonal matrix. It raises
    `ValueError` on a zero diagonal entry.
- `ddgmesh.isolines`
  - `subtract_minimum_distance(phi)` shifts a field so that its minimum is zero.
  - `isolines(geometry, solution, spacing=None)` extracts level-set segments of
    a per-vertex scalar. It returns segment end points and index pairs. The
    spacing defaults to a twentieth of the largest value.

## Installation

```
pip install ddgmesh
```

## Example

```python
import numpy as np
from ddgmesh.mesh import SurfaceMesh
from ddgmesh.geometry import VertexPositionGeometry
from ddgmesh import dec

positions = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0], [1, 1, 0]], dtype=float)
mesh = SurfaceMesh([[0, 1, 2], [1, 3, 2]])
geometry = VertexPositionGeometry(mesh, positions)

print(geometry.euler_characteristic())   # 1
print(geometry.total_area())             # 1.0

d0 = dec.exterior_derivative_0_form(geometry)
d1 = dec.exterior_derivative_1_form(geometry)
print(abs(d1 @ d0).sum())                # 0.0: d applied twice vanishes
```

## What it does not do

- There is no viewer and no command-line program. The package is a library
  of functions and classes only.
- It does not compute geodesic distances itself. `ddgmesh.isolines` only
  normalises and draws isolines of a distance field you supply.
- It does not build dual meshes.
- It does not design direction fields or compute connections.
- It does not generate random forms.

## Running the tests

```
pip install ddgmesh[test]
pytest
```