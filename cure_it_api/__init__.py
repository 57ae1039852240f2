"""
Top‑level package for the Cure It API.

This file makes ``cure_it_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``cure_it_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
