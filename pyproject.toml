[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aegiskern"
version = "0.1.0"
description = "Host-side model of a small AArch64 microkernel: MMU descriptors, platform memory map, UART formatting, syscall ABI and demo user tasks"
requires-python = ">=3.10"
dependencies = []
keywords = ["microkernel", "aarch64", "mmu", "syscall", "qemu", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["aegiskern"]

[tool.pytest.ini_options]
addopts = "-ra"
