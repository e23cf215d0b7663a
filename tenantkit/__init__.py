"""
tenantkit

Multi-tenant SaaS scaffold: tenant resolution, row-level-security scoped
data access, membership permissions and tenant business rules.
"""

__version__ = "0.1.0"
