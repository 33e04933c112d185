"""
Storage layer.

Services talk to collections through the :class:`Repository`
contract so the backing store can be swapped without touching the
business logic.  The API ships with :class:`InMemoryRepository`,
seeded with mock data on startup.
"""

from .base import Repository, InMemoryRepository, Repositories, generate_id

__all__ = ["Repository", "InMemoryRepository", "Repositories", "generate_id"]
