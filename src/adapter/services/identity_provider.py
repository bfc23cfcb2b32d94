"""Identity Provider Implementations"""

from typing import Optional
from src.app.services.identity_provider import IdentityProvider


class StaticIdentityProvider(IdentityProvider):
    """
    Identity fixed at construction

    The API builds one per request from the X-Tenant-ID / X-User-ID headers;
    workers use it with user_id=None.
    """

    def __init__(self, tenant_id: Optional[str] = None, user_id: Optional[str] = None):
        self.tenant_id = tenant_id
        self.user_id = user_id

    def current_tenant_id(self) -> Optional[str]:
        return self.tenant_id

    def current_user_id(self) -> Optional[str]:
        return self.user_id
