[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ddgmesh"
version = "0.1.0"
description = "Discrete differential geometry on polygon meshes: halfedge connectivity, curvatures, normals, DEC operators and isolines"
requires-python = ">=3.10"
keywords = [
    "geometry",
    "mesh",
    "halfedge",
    "discrete exterior calculus",
    "curvature",
    "differential geometry",
    "isolines",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ddgmesh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
