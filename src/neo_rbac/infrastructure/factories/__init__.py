"""RBAC factories."""

from .authority_factory import create_authority

__all__ = ["create_authority"]
