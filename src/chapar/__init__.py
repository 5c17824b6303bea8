"""High-level Chapar client entrypoints."""
from .client import ChaparClient
from .config import ClientConfig, UrlSpec
from .exceptions import ChaparError, TransportError
from .results import ResultEnvelope

__all__ = [
    "ChaparClient",
    "ClientConfig",
    "UrlSpec",
    "ChaparError",
    "TransportError",
    "ResultEnvelope",
]
