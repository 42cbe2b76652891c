"""
Console configuration.

Settings are read from environment variables (a `.env` file is loaded
first, if present) into a `Settings` model shared by the remote client,
the views and the application entry point.

Environment variables:
    - PROVIDER_MANAGEMENT_URL: Provider management API base (target of `/api/provider/*`)
    - CONSUMER_MANAGEMENT_URL: Consumer management API base (target of `/api/consumer/*`)
    - PROVIDER_HEALTH_URL:     Provider health endpoint
    - CONSUMER_HEALTH_URL:     Consumer health endpoint
    - PROVIDER_PROTOCOL_URL:   Provider protocol endpoint used as `counterPartyAddress`
    - DSP_PROTOCOL:            Dataspace protocol identifier
    - HEALTH_TIMEOUT:          Seconds allowed to a health check (default: 5)
    - HEALTH_REFETCH_INTERVAL: Seconds a health result stays fresh (default: 30)
    - COLLECTION_REFETCH_INTERVAL: Seconds a connector collection stays fresh (default: 0)
    - LOG_LEVEL:               Root log level (default: INFO)
"""

import os
from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    """
    Runtime configuration of the console.

    Example:
        >>> settings = Settings(provider_protocol_url="http://provider:19194/protocol")
        >>> settings.dsp_protocol
        'dataspace-protocol-http'
    """

    provider_management_url: str = "http://localhost:19193/management/v3"
    """Base URL the `/api/provider/*` prefix is rewritten to."""

    consumer_management_url: str = "http://localhost:29193/management/v3"
    """Base URL the `/api/consumer/*` prefix is rewritten to."""

    provider_health_url: str = "http://localhost:19191/api/check/health"
    consumer_health_url: str = "http://localhost:29191/api/check/health"

    provider_protocol_url: str = "http://localhost:19194/protocol"
    """Protocol endpoint of the provider, sent as `counterPartyAddress`."""

    dsp_protocol: str = "dataspace-protocol-http"

    health_timeout: float = 5.0
    health_refetch_interval: float = 30.0

    collection_refetch_interval: float = 0.0
    """Seconds a connector collection stays fresh; 0 refetches it on every page render."""

    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Builds the settings from the environment.

    Returns:
        Settings: Configuration with every unset variable left at its default.
    """

    load_dotenv()

    env = {
        "provider_management_url": os.getenv("PROVIDER_MANAGEMENT_URL"),
        "consumer_management_url": os.getenv("CONSUMER_MANAGEMENT_URL"),
        "provider_health_url": os.getenv("PROVIDER_HEALTH_URL"),
        "consumer_health_url": os.getenv("CONSUMER_HEALTH_URL"),
        "provider_protocol_url": os.getenv("PROVIDER_PROTOCOL_URL"),
        "dsp_protocol": os.getenv("DSP_PROTOCOL"),
        "health_timeout": os.getenv("HEALTH_TIMEOUT"),
        "health_refetch_interval": os.getenv("HEALTH_REFETCH_INTERVAL"),
        "collection_refetch_interval": os.getenv("COLLECTION_REFETCH_INTERVAL"),
        "log_level": os.getenv("LOG_LEVEL"),
    }
    return Settings(**{key: value for key, value in env.items() if value})
