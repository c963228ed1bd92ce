[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bitbang_i2c"
version = "0.1.0"
description = "Bit-banged I2C host driven through user-supplied SDA/SCL callbacks"
requires-python = ">=3.10"
dependencies = []
keywords = ["i2c", "bit-bang", "embedded", "gpio", "soft-i2c"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bitbang_i2c"]

[tool.pytest.ini_options]
addopts = "-ra"
