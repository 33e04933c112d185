"""
Version 1 of the API.

Bundles the endpoints used by the admin dashboard.  Breaking changes
should be introduced in a new version subpackage.
"""
