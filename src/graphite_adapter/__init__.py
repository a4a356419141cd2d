"""Public package exports for the Graphite band adapter."""

from .client import GraphiteClient
from .config import GraphiteClientConfig

__all__ = ["GraphiteClient", "GraphiteClientConfig"]
