"""API Package"""
from api.routes import (
    domain_routes,
    credit_routes,
    admin_routes,
    health_routes
)

__all__ = [
    "domain_routes",
    "credit_routes",
    "admin_routes",
    "health_routes"
]
