"""
Package marker for the library catalog service.
It groups the API, shared helpers, and catalog bootstrap modules under one import path.
Most functionality lives in the sibling modules; this file intentionally stays lightweight.
"""

__version__ = "0.1.0"
