"""
Top‑level package for the Student Records API.

This file makes ``student_records_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``student_records_api.app.main``.  The HTTP client used by
scripts and other services lives in ``student_records_api.client``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
