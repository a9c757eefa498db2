"""Dispatch module."""

from .router import GET_STARTED, DispatchRouter, PayloadHandler

__all__ = ["GET_STARTED", "DispatchRouter", "PayloadHandler"]
