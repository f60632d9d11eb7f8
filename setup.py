# File: goci/setup.py
# Location: goci/setup.py
"""
Setup script for goci.

This file configures how the package is built, installed, and what
dependencies are required.
"""

import os
from setuptools import setup, find_packages

# Load version from version.py without importing the module
version = {}
with open(os.path.join("goci", "version.py")) as f:
    exec(f.read(), version)

# Read the README for the long description
this_dir = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_dir, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="goci",
    version=version["__version__"],
    description="Composable containerized build, test and lint pipelines for Go projects.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "dagger-io",
        "jinja2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={"console_scripts": ["goci=goci.cli:main"]},
    include_package_data=True,
    package_data={"goci": ["config.json", "templates/*.j2"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
)
