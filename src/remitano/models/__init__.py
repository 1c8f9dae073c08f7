"""모델 패키지"""
from .schemas import Credentials, ClientConfig

__all__ = ["Credentials", "ClientConfig"]
