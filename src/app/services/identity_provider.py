"""Identity Provider Interface

Resolves who is acting and for which tenant. The ledger only uses it to
default tenant_id on creation and to fill audit fields.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IdentityProvider(ABC):

    @abstractmethod
    def current_tenant_id(self) -> Optional[str]:
        pass

    @abstractmethod
    def current_user_id(self) -> Optional[str]:
        pass
