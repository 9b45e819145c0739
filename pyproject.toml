[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stereoslam"
version = "0.1.0"
description = "Building blocks for stereo-inertial visual SLAM: stereo matching, keyframe decisions, a binary-descriptor vocabulary and tracking helpers."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["slam", "stereo", "orb", "bag-of-words", "computer-vision", "tracking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Recognition",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["stereoslam"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
