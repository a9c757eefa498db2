"""Event normalizer module."""

from .normalizer import normalize_payload

__all__ = ["normalize_payload"]
