"""Services package initialization."""
from options_viewer.services.gateway import ProxyGateway
from options_viewer.services.metrics import annotate, annotate_all

__all__ = [
    "ProxyGateway",
    "annotate",
    "annotate_all"
]
