"""Exceptions raised by the HubSpot client."""

from typing import Optional


class HubSpotError(RuntimeError):
    """Base class for all errors raised by hubspot_mapper."""


class ModelConfigurationError(HubSpotError, TypeError):
    """An entity class cannot be mapped (raised when the Model is built)."""


class ConfigError(HubSpotError, ValueError):
    """Invalid client configuration."""


class ShapeError(HubSpotError):
    """A response did not have the structure the caller relies on."""


class TransportError(HubSpotError):
    """HTTP request failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(cls, status_code: int, reason: str, body: str) -> "TransportError":
        if body:
            return cls(body, status_code=status_code, body=body)
        return cls(f"{status_code}: {reason}", status_code=status_code, body=body)
