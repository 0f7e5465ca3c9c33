"""Blueprint exports."""

from . import finance, health, rpc

__all__ = ["finance", "health", "rpc"]
