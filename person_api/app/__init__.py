"""
Application package for the Person API.

The package is split into ``core`` (configuration, logging, database
boundary and errors), ``schemas`` (pydantic models), ``services`` (data
access through stored procedures) and ``api`` (versioned HTTP routes).
"""

from .main import app  # noqa: F401
