[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "astrolens"
version = "0.1.0"
description = "Radial lens distortion of images, with objective and constraint functions for fitting the distortion coefficients"
requires-python = ">=3.10"
keywords = ["distortion", "lens", "image", "fisheye", "optimization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "pillow",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
astrolens-rosenbrock = "astrolens.rosenbrock:main"
astrolens-flip = "astrolens.flip:main"

[tool.hatch.build.targets.wheel]
packages = ["astrolens"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
