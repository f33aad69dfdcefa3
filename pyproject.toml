[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pica3d"
version = "1.6.2"
description = "Vector, quaternion and matrix maths, matrix stacks, procedural texture tables, mipmap generation and Tex3DS header parsing for a PICA200-style GPU pipeline"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "matrix", "quaternion", "projection", "texture", "mipmap", "pica200", "tex3ds"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pica3d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
