[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asm14"
version = "0.1.0"
description = "Two-pass assembler for a 14-bit teaching machine, with macro expansion and dot/slash object output"
requires-python = ">=3.10"
dependencies = []
keywords = ["assembler", "macro", "two-pass", "14-bit", "education"]
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
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
asm14 = "asm14.assembler:main"

[tool.hatch.build.targets.wheel]
packages = ["asm14"]

[tool.pytest.ini_options]
addopts = "-ra"
