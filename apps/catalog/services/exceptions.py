"""Domain exceptions for catalog app."""


class CatalogServiceError(Exception):
    """Base exception for all catalog service errors."""
    pass


class ServiceNotFoundError(CatalogServiceError):
    """Service does not exist or is inactive."""
    pass
