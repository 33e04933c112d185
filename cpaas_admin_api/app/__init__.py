"""
Application package initializer.

The API is organised into layers: ``core`` (configuration, errors,
security and the list query engine), ``repositories`` (storage),
``services`` (business logic per resource), ``schemas`` (pydantic
models) and ``api`` (routers, grouped by version).  ``seed`` fills the
in-memory collections on startup.
"""

from .main import app  # noqa: F401
