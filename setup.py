#!/usr/bin/env python3
"""
Setup script for catlink
"""

from setuptools import setup

# Read the README file
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Read the requirements file
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

# Read version from version.py
version = "0.0.0"
with open("src/version.py", "r", encoding="utf-8") as fh:
    for line in fh:
        if line.startswith("__version__ = "):
            version = line.split('"')[1]
            break

setup(
    name="catlink",
    version=version,
    author="Station Manager contributors",
    author_email="",
    description="CAT command/response link driver for serial-attached transceivers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["catlink"],
    package_dir={"catlink": "src"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Communications :: Ham Radio",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    entry_points={
        "console_scripts": [
            "catlink=catlink.main:main",
        ],
    },
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
        ],
    },
)
