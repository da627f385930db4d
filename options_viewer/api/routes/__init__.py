"""API routes package initialization."""
from options_viewer.api.routes import health, option_contracts

__all__ = ["health", "option_contracts"]
