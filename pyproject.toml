[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hrsystem"
version = "1.0.0"
description = "Human-resources employee records served over a line-delimited JSON TCP protocol, with an interactive console client"
requires-python = ">=3.10"
keywords = ["hr", "human resources", "employees", "crud", "tcp", "json", "postgresql"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Office/Business",
]
dependencies = [
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
hrsystem-server = "hrsystem.server:main"
hrsystem-client = "hrsystem.app:main"

[tool.hatch.build.targets.wheel]
packages = ["hrsystem"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
