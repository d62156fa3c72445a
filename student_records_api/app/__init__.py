"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules, layered from the bottom up:

* ``core`` – configuration, logging, database access and errors
* ``models`` – stored entities
* ``repositories`` – SQL access to the store
* ``schemas`` – validated request/response views
* ``services`` – business rules
* ``api`` – routers grouped by version under ``api/<version>/``
"""

from .main import app  # noqa: F401
