"""Local conversation simulator."""

from .sim import ISim, Sim, build_webhook_body

__all__ = ["ISim", "Sim", "build_webhook_body"]
