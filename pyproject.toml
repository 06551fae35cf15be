[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ossims"
version = "0.1.0"
description = "Small operating-systems simulators: a multi-threaded train crossing scheduler and a virtual memory paging simulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "scheduling", "threads", "virtual memory", "paging", "operating systems"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ossims-trains = "ossims.trains:main"
ossims-virtmem = "ossims.virtmem:main"

[tool.hatch.build.targets.wheel]
packages = ["ossims"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
