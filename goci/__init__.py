# File: goci/__init__.py
# Location: goci/goci/__init__.py

"""
goci Package.

This package provides composable descriptions of containerized build, test
and lint pipelines for Go projects, and adapters that hand those
descriptions to the Dagger engine.
"""

from .version import __version__
