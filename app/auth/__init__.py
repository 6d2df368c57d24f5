"""
Users Auth API - Authentication Module

Register/login with signed bearer tokens.
"""

from app.auth.router import create_auth_router
from app.auth.dependencies import require_auth

__all__ = ["create_auth_router", "require_auth"]
