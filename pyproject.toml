[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpcwire"
version = "0.1.0"
description = "Async message transports (in-process, stdio, WebSocket) and sample RPC-style services"
requires-python = ">=3.10"
dependencies = [
    "websockets",
]
keywords = ["rpc", "asyncio", "websocket", "transport", "stdio", "ipc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["rpcwire"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
