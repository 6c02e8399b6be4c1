[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ringkit"
version = "0.1.0"
description = "Ring buffers, queues, pools and spans with power-of-two capacities and free-running counters"
requires-python = ">=3.10"
dependencies = []
keywords = ["ring buffer", "circular buffer", "fifo", "queue", "pool", "span"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["ringkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
