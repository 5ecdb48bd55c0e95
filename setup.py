#!/usr/bin/env python3
"""cdeploy CLI - Setup"""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith("#")]

setup(
    name="cdeploy",
    version="1.0.0",
    description="Build, push and deploy container apps to AWS from a CD pipeline",
    author="cdeploy Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={
        "tests": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "cdeploy=cdeploy.main:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
