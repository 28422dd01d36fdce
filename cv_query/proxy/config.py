"""Proxy configuration with environment variable loading.

Pydantic-based configuration for the upstream CV query service.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_UPSTREAM_URL = "https://llm-cv-api.onrender.com/query"


class ProxyConfig(BaseModel):
    """Configuration for the query proxy.

    Attributes:
        upstream_url: Full URL of the upstream query endpoint.
    """

    upstream_url: str = Field(
        default_factory=lambda: os.getenv("CV_API_URL", DEFAULT_UPSTREAM_URL),
        description="Upstream CV query endpoint",
    )

    @field_validator("upstream_url")
    @classmethod
    def validate_upstream_url(cls, v: str) -> str:
        """Validate that the upstream URL is an absolute http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("CV_API_URL must be an absolute http(s) URL")
        return v


def get_proxy_config() -> ProxyConfig:
    """Create proxy configuration from environment.

    Returns:
        Configured ProxyConfig instance.

    Raises:
        ValueError: If CV_API_URL is not an http(s) URL.
    """
    return ProxyConfig()
