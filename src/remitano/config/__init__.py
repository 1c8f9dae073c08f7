"""설정 패키지"""
from .settings import Settings, settings

__all__ = ["Settings", "settings"]
