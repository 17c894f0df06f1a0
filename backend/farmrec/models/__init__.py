from .user import AppUser
from .farmer import Farmer
from ..core.database import Base
__all__ = [
    "AppUser",
    "Farmer",
    "Base"
]
