[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simpleweb"
version = "1.0.0"
description = "A small threaded HTTP-like web server and load-generating client with a thread pool and queued logger"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "client", "thread-pool", "load-testing", "socket"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
simpleweb-server = "simpleweb.server:main"
simpleweb-client = "simpleweb.client:main"

[tool.hatch.build.targets.wheel]
packages = ["simpleweb"]

[tool.pytest.ini_options]
addopts = "-ra"
