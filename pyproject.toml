[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adminkit"
version = "0.1.0"
description = "Building blocks for admin back ends: runtime registry, prefixed cache/queue/locker wrappers, response envelopes, JWT claims, configuration models and helpers."
requires-python = ">=3.10"
keywords = ["admin", "framework", "runtime", "response", "jwt", "configuration", "captcha", "websocket"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "bcrypt",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["adminkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
