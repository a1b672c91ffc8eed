"""Discrete differential geometry on polygon meshes: halfedge meshes, geometry, DEC operators and isolines."""

__version__ = "0.1.0"