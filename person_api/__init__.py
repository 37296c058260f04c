"""
Top-level package for the Person API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
