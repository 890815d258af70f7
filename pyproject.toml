[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "acpiparse"
version = "0.1.0"
description = "Decoding of ACPI structures: the RSDP, AML package lengths, AML values and resource descriptors"
requires-python = ">=3.10"
dependencies = []
keywords = ["acpi", "aml", "rsdp", "firmware", "resource-descriptor", "crs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["acpiparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
