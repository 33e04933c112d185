"""
Top-level package for the CPaaS Admin API.

Makes ``cpaas_admin_api`` importable so that modules within ``app`` can
be referenced with fully qualified names such as
``cpaas_admin_api.app.main``.  All functionality lives in submodules
under ``app``.
"""

__all__ = []
