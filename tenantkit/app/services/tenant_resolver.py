"""
Tenant Resolver

Derives a tenant slug from one configured source of an inbound request.
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field

from tenantkit.domain.errors import TENANT_REQUIRED
from tenantkit.libs.result import Error, Result, Return


class TenantSource(str, Enum):
    header = "header"
    subdomain = "subdomain"
    query = "query"
    path = "path"


class TenantResolverConfig(BaseModel):
    """Which request source names the tenant, and what to do when it is absent."""

    source: TenantSource = TenantSource.header
    header_name: str = "x-tenant-slug"
    subdomain_exclusions: List[str] = Field(default_factory=lambda: ["www", "localhost"])
    query_key: str = "tenant"
    path_index: int = Field(default=1, ge=0)
    required: bool = True
    fallback_slug: Optional[str] = "default"

    @classmethod
    def from_config(cls, config) -> "TenantResolverConfig":
        return cls(
            source=config.TENANT_SOURCE,
            header_name=config.TENANT_HEADER_NAME,
            subdomain_exclusions=config.TENANT_SUBDOMAIN_EXCLUSIONS,
            query_key=config.TENANT_QUERY_KEY,
            path_index=config.TENANT_PATH_INDEX,
            required=config.TENANT_REQUIRED,
            fallback_slug=config.DEFAULT_TENANT_SLUG,
        )


@dataclass(frozen=True)
class RequestSnapshot:
    """The parts of a request the resolver may read.

    Header names are expected lowercased.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    host: Optional[str] = None
    query: Mapping[str, str] = field(default_factory=dict)
    path: str = "/"


class TenantResolver:
    def __init__(self, config: TenantResolverConfig):
        self.config = config

    def extract(self, request: RequestSnapshot) -> Optional[str]:
        """Slug from the configured source, or None."""
        source = self.config.source
        if source == TenantSource.header:
            value = request.headers.get(self.config.header_name.lower())
        elif source == TenantSource.subdomain:
            value = self._subdomain(request.host)
        elif source == TenantSource.query:
            value = request.query.get(self.config.query_key)
        elif source == TenantSource.path:
            segments = request.path.split("/")
            index = self.config.path_index
            value = segments[index] if index < len(segments) else None
        else:
            value = None

        if value is None:
            return None
        value = value.strip()
        return value or None

    def resolve(self, request: RequestSnapshot) -> Result[Optional[str]]:
        """
        Resolve the tenant slug for a request.

        Returns:
            Result with the slug; None when resolution is optional and
            neither the source nor a fallback names a tenant.
            Error TENANT_REQUIRED when resolution is required and the
            source is empty.
        """
        slug = self.extract(request)
        if slug is not None:
            return Return.ok(slug)

        if self.config.required:
            return Return.err(
                Error(TENANT_REQUIRED, "Tenant context is required but not provided")
            )

        return Return.ok(self.config.fallback_slug or None)

    def _subdomain(self, host: Optional[str]) -> Optional[str]:
        hostname = _hostname(host)
        if hostname is None:
            return None

        labels = hostname.split(".")
        # An apex domain (example.com) or bare localhost carries no tenant label
        apex_labels = 1 if labels[-1] == "localhost" else 2
        if len(labels) <= apex_labels:
            return None

        label = labels[0]
        if not label or label in self.config.subdomain_exclusions:
            return None
        return label


def _hostname(host: Optional[str]) -> Optional[str]:
    """Lowercased host name without port; None for IP literals."""
    if not host:
        return None
    host = host.strip().lower()
    if host.startswith("["):
        return None

    hostname, _, port = host.partition(":")
    if ":" in port:
        # Unbracketed IPv6 address
        return None
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        return hostname or None
    return None
