[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netlab"
version = "0.1.0"
description = "Small socket programs: address conversions, calculators, select and event-driven echo servers, multicast news, file transfer and a tiny web server"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sockets",
    "tcp",
    "udp",
    "multicast",
    "broadcast",
    "echo-server",
    "select",
    "selectors",
    "http",
    "networking",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netlab-addresses = "netlab.addresses:main"
netlab-calc = "netlab.calc:main"
netlab-textcalc = "netlab.textcalc:main"
netlab-web = "netlab.webserver:main"
netlab-news = "netlab.news:main"
netlab-select-echo = "netlab.select_server:main"
netlab-event-echo = "netlab.event_server:main"
netlab-file = "netlab.file_transfer:main"
netlab-sockinfo = "netlab.sockinfo:main"

[tool.hatch.build.targets.wheel]
packages = ["netlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
