"""
Static auth header helpers for fetchling.
"""
from .encoding import (
    AUTH_TYPES,
    basic_auth_headers,
    bearer_auth_headers,
    encode_auth,
)

__all__ = [
    "AUTH_TYPES",
    "basic_auth_headers",
    "bearer_auth_headers",
    "encode_auth",
]
