"""
Service layer abstraction.

Each service encapsulates the business logic of one resource and
talks to its collection only through the repositories it was built
with, so the in-memory store can be replaced without changing the API
handlers.  Every list operation declares a
:class:`~cpaas_admin_api.app.core.query.ResourceQuerySpec` and runs
through the shared list query engine.
"""
