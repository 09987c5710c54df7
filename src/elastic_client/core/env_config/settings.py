"""
Pydantic settings for environment configuration.

Every field maps to an ``ELASTIC_CLIENT_*`` variable, e.g.
``ELASTIC_CLIENT_BASE_URL`` or ``ELASTIC_CLIENT_TIMEOUT_READ``.
"""

from typing import Optional, Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..params import DEFAULT_BASE_URL


class ElasticClientSettings(BaseSettings):
    """
    Client configuration from environment variables.

    Reads from:
    1. Init arguments
    2. Environment variables (ELASTIC_CLIENT_*)
    3. .env file
    4. Defaults

    Example .env file:
        ELASTIC_CLIENT_BASE_URL=https://es.internal:9200
        ELASTIC_CLIENT_TIMEOUT_READ=60
        ELASTIC_CLIENT_CA_BUNDLE=/etc/elasticsearch/certs/ca.pem
        ELASTIC_CLIENT_API_KEY=VnVhQ2ZHY0JDZGJrUW0tZTVhT3g6dWkybHAyYXhUTm1zeWFrdzl0dk5udw==
        ELASTIC_CLIENT_WORKER_POOL_SIZE=4
        ELASTIC_CLIENT_LOG_ENABLED=true
        ELASTIC_CLIENT_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix='ELASTIC_CLIENT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Connection
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Url of the Elasticsearch node")

    # Timeouts
    timeout_connect: float = Field(default=5.0, gt=0)
    timeout_read: float = Field(default=30.0, gt=0)

    # Security
    verify_ssl: bool = Field(default=True)
    ca_bundle: Optional[str] = None
    client_cert: Optional[str] = None
    client_key: Optional[str] = None
    max_response_size: int = Field(default=100 * 1024 * 1024, gt=0)

    # Connection pool
    pool_connections: int = Field(default=10, ge=1)
    pool_maxsize: int = Field(default=10, ge=1)

    # Async decoding pool (0 = inline)
    worker_pool_size: int = Field(default=0, ge=0)

    # Logging
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")
    log_file_path: Optional[str] = None

    # Credentials (never logged)
    api_key: Optional[SecretStr] = Field(default=None, description="Encoded Elasticsearch API key")
    username: Optional[str] = None
    password: Optional[SecretStr] = None

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip('/')

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def lower_log_format(cls, v):
        return v.lower() if isinstance(v, str) else v

    @model_validator(mode='after')
    def validate_credentials(self) -> 'ElasticClientSettings':
        if self.password is not None and not self.username:
            raise ValueError("password requires username")
        if self.api_key is not None and self.username:
            raise ValueError("api_key and username/password are mutually exclusive")
        if self.client_key and not self.client_cert:
            raise ValueError("client_key requires client_cert")
        return self
