from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="qalias",
    version="0.1.0",
    description="Fixed-precision alias tables for weighted state preparation",
    packages=find_packages(include=["qalias", "qalias.*"]),
    python_requires=">=3.10",
    install_requires=["numpy>=1.22"],
    extras_require={"test": ["pytest>=7"]},
)
