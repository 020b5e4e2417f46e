"""
Password Hashers
================
One hasher per algorithm family, all sharing the ``encode``/``matches``
interface of ``BasePasswordHasher``.
"""

from .base import BasePasswordHasher
from .bcrypt_hasher import BcryptHasher
from .pbkdf2 import Pbkdf2Hasher
from .scrypt import ScryptHasher
from .argon2_hasher import Argon2Hasher
from .noop import NoOpHasher

__all__ = [
    "BasePasswordHasher",
    "BcryptHasher",
    "Pbkdf2Hasher",
    "ScryptHasher",
    "Argon2Hasher",
    "NoOpHasher",
]
