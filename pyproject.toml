[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netlab"
version = "0.1.0"
description = "Small socket programs: a TCP chat server and client, a threaded TCP echo server and client, and a UDP time server and client"
requires-python = ">=3.10"
dependencies = []
keywords = ["socket", "chat", "echo", "udp", "tcp", "time", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netlab-chat-server = "netlab.chat_server:main"
netlab-chat = "netlab.chat_client:main"
netlab-echo-server = "netlab.echo_server:main"
netlab-echo = "netlab.echo_client:main"
netlab-time-server = "netlab.time_server:main"
netlab-time = "netlab.time_client:main"

[tool.hatch.build.targets.wheel]
packages = ["netlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
