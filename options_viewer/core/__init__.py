"""Core package initialization."""
from options_viewer.core.config import settings

__all__ = ["settings"]
