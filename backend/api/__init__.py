"""
D.E.F.E.N.D API Routers
FastAPI router modules for the site backend.
"""
from backend.api import contact, health, site

__all__ = [
    "contact",
    "health",
    "site",
]
