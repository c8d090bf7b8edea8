"""API routers package."""
from . import books
