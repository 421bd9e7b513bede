"""HTTP service exposing the connect and generate actions."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
