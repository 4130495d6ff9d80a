[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osal-typegen"
version = "0.1.2"
description = "Generate FreeRTOS integer type mappings during a build"
requires-python = ">=3.10"
dependencies = []
keywords = ["build", "embedded", "freertos", "codegen"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
osal-typegen = "osal_typegen.build:main"

[tool.hatch.build.targets.wheel]
packages = ["osal_typegen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
