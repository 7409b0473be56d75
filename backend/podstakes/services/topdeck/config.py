from pydantic import BaseModel


class TopdeckConfig(BaseModel):
    """Configuration for Topdeck.gg API client."""

    base_url: str = "https://api.topdeck.gg/v2"
    api_key_header: str = "X-Api-Key"
    timeout_seconds: float = 30.0
    max_connections: int = 20
    max_keepalive_connections: int = 5
    max_retries: int = 1
