[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xraml"
version = "0.1.0"
description = "Generate RAML type libraries from Salesforce object metadata and field specification CSV files"
requires-python = ">=3.10"
dependencies = []
keywords = ["raml", "salesforce", "metadata", "csv", "code-generation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xraml = "xraml.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["xraml"]

[tool.pytest.ini_options]
addopts = "-ra"
