"""
Application package initializer.

This package contains the entrypoint for the API and its submodules.
The event catalog lives in ``services``, its payload models in
``schemas`` and the HTTP surface in ``api/v1/endpoints``.  Versioning
is handled by grouping routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
