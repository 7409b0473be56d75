"""Topdeck.gg tournament API integration."""

from .client import TopdeckClient, create_topdeck_client
from .config import TopdeckConfig
from .exceptions import (
    TopdeckAPIError,
    TopdeckAuthError,
    TopdeckNotFoundError,
    TopdeckRateLimitError,
    TopdeckServerError,
)
from .models import Pod, Round, Tournament

__all__ = [
    "TopdeckClient",
    "create_topdeck_client",
    "TopdeckConfig",
    "TopdeckAPIError",
    "TopdeckAuthError",
    "TopdeckNotFoundError",
    "TopdeckRateLimitError",
    "TopdeckServerError",
    "Pod",
    "Round",
    "Tournament",
]
