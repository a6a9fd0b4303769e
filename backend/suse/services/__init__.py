"""
SUSE Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from suse.services.base import (
    BaseService,
    ServiceError,
    InvalidInputError,
    InsufficientDataError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "InvalidInputError",
    "InsufficientDataError",
]
