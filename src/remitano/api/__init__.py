"""Remitano API 패키지"""
from .endpoints import API_URL, API_PREFIX
from .client import RemitanoClient

__all__ = ["RemitanoClient", "API_URL", "API_PREFIX"]
