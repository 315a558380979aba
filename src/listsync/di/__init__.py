from .container import Container, Registration
from .lifetime import Lifetime

__all__ = [
    "Container",
    "Lifetime",
    "Registration",
]
