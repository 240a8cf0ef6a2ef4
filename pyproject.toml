[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lritkit"
version = "0.1.0"
description = "Decode GOES LRIT/HRIT symbol streams and parse the DCS and EMWIN data they carry"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "goes",
    "lrit",
    "hrit",
    "emwin",
    "dcs",
    "satellite",
    "ccsds",
    "viterbi",
    "reed-solomon",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
    "Topic :: Communications :: Ham Radio",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lritkit-sync-words = "lritkit.sync_words:main"

[tool.hatch.build.targets.wheel]
packages = ["lritkit"]

[tool.pytest.ini_options]
addopts = "-ra"
