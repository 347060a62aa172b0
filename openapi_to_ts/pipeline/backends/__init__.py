"""
Backends module.

Contains the TypeScript emitter and the API interface renderer.
"""

from __future__ import annotations

from .api_backend import ApiBackend
from .base import CodeBackend
from .typescript_backend import TypeScriptBackend

__all__ = [
    "CodeBackend",
    "TypeScriptBackend",
    "ApiBackend",
]
