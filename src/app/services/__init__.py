from .unit_of_work import UnitOfWork
from .identity_provider import IdentityProvider
from .notification_service import NotificationService
from .reference_number_generator import ReferenceNumberGenerator

__all__ = [
    "UnitOfWork",
    "IdentityProvider",
    "NotificationService",
    "ReferenceNumberGenerator",
]
