"""
Field constraints shared by request payloads and use case commands.
"""

from typing import Annotated

from pydantic import StringConstraints

Slug = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50, pattern=r"^[a-z0-9-]+$")
]

TenantName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

ExternalId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

PersonName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]
