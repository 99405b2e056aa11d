"""API package exposing FastAPI routers and schemas."""

from .routes import KNOWN_ENDPOINTS, ServiceRegistry, configure_services, get_services, router

__all__ = ["KNOWN_ENDPOINTS", "ServiceRegistry", "configure_services", "get_services", "router"]
