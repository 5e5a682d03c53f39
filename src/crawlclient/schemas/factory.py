"""Factory for resolving API schema variants."""

from crawlclient.core.errors import ConfigurationError
from crawlclient.core.interfaces import ApiSchema
from crawlclient.schemas.v0 import V0Schema
from crawlclient.schemas.v1 import V1Schema


class SchemaFactory:
    """Factory for creating version-specific API schemas."""

    _SCHEMAS: dict[str, type[ApiSchema]] = {
        "v0": V0Schema,
        "v1": V1Schema,
    }

    @classmethod
    def get_schema(cls, version: str) -> ApiSchema:
        """Get the schema for an API version.

        Args:
            version: Version tag (e.g., "v1").

        Returns:
            Schema instance.

        Raises:
            ConfigurationError: If the version is unknown.
        """
        key = version.lower()
        if key not in cls._SCHEMAS:
            known = ", ".join(sorted(cls._SCHEMAS))
            raise ConfigurationError(
                f"unsupported API version {version!r} (expected one of: {known})"
            )
        return cls._SCHEMAS[key]()

    @classmethod
    def list_versions(cls) -> list[str]:
        """List all known API versions."""
        return list(cls._SCHEMAS.keys())

    @classmethod
    def register_schema(cls, version: str, schema_class: type[ApiSchema]) -> None:
        """Register a schema for a new API version.

        Args:
            version: Version tag.
            schema_class: Schema class.
        """
        cls._SCHEMAS[version.lower()] = schema_class
