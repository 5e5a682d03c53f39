"""Version-specific request and response schemas."""

from crawlclient.schemas.factory import SchemaFactory
from crawlclient.schemas.v0 import V0Schema
from crawlclient.schemas.v1 import V1Schema

__all__ = [
    "SchemaFactory",
    "V0Schema",
    "V1Schema",
]
