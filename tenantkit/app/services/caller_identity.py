from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CallerIdentity:
    """Verified identity of the caller as issued by the identity provider.

    `external_id` is the provider's subject; it is matched against
    Membership.external_id within a tenant.
    """

    external_id: str
    email: Optional[str] = None
