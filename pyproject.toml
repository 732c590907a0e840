[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kubecluster"
version = "0.1.0"
description = "Data model, defaulting, validation and reconciliation helpers for KubeCluster resources"
requires-python = ">=3.10"
dependencies = []
keywords = ["kubernetes", "cluster", "controller", "operator", "reconciler", "expectations"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kubecluster"]

[tool.pytest.ini_options]
addopts = "-ra"
