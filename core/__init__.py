"""Core Package"""
from core.ai_manager import AIManager
from core.exceptions import *

__all__ = [
    "AIManager"
]
