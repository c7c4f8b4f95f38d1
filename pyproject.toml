[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pfdsp"
version = "1.0.0"
description = "DSP routines for complex baseband signals: frequency shifters, recursive oscillators, carrier patterns, a CIC down-converter and FFT fast convolution."
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["dsp", "sdr", "iq", "mixer", "oscillator", "cic", "convolution", "fft"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Communications :: Ham Radio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pfdsp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
