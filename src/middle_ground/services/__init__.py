"""Business logic services for the Middle Ground application.

Only the error hierarchy is re-exported here; import the other submodules
directly (``middle_ground.services.ranking`` and so on).
"""

from .errors import ConflictError, FeedError, NotFoundError, ValidationError

__all__ = [
    "ConflictError",
    "FeedError",
    "NotFoundError",
    "ValidationError",
]
