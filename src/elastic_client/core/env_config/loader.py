"""
Build client parameters and configuration from the environment.
"""

import base64
from typing import Any, Optional, Tuple

from ..config import (
    ClientConfig,
    ConnectionPoolConfig,
    SecurityConfig,
    TimeoutConfig,
    WorkerPoolConfig,
)
from ..logging.config import LoggingConfig
from ..params import RequestParams
from .settings import ElasticClientSettings


def _authorization(settings: ElasticClientSettings) -> Optional[str]:
    if settings.api_key is not None:
        return f"ApiKey {settings.api_key.get_secret_value()}"
    if settings.username:
        password = settings.password.get_secret_value() if settings.password else ""
        token = base64.b64encode(f"{settings.username}:{password}".encode("utf-8")).decode("ascii")
        return f"Basic {token}"
    return None


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> Tuple[RequestParams, ClientConfig]:
    """
    Load connection parameters and client config from the environment.

    Priority (highest to lowest):
    1. **overrides - explicit values, validated like the variables
    2. Environment variables (ELASTIC_CLIENT_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Custom .env file path (default: ``.env``)
        **overrides: Field values of ``ElasticClientSettings``

    Returns:
        ``(RequestParams, ClientConfig)``

    Raises:
        pydantic.ValidationError: If a value is invalid

    Example:
        >>> params, config = load_from_env(base_url="http://es-test:9200")
        >>> client = SyncClient(params, config)
    """
    if env_file is not None:
        settings = ElasticClientSettings(_env_file=env_file, **overrides)
    else:
        settings = ElasticClientSettings(**overrides)

    params = RequestParams(base_url=settings.base_url)
    authorization = _authorization(settings)
    if authorization is not None:
        params = params.header("Authorization", authorization)

    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_file=settings.log_file_path is not None,
            file_path=settings.log_file_path,
        )

    config = ClientConfig(
        timeout=TimeoutConfig(connect=settings.timeout_connect, read=settings.timeout_read),
        pool=ConnectionPoolConfig(
            pool_connections=settings.pool_connections,
            pool_maxsize=settings.pool_maxsize,
        ),
        security=SecurityConfig(
            verify_ssl=settings.verify_ssl,
            ca_bundle=settings.ca_bundle,
            client_cert=settings.client_cert,
            client_key=settings.client_key,
            max_response_size=settings.max_response_size,
        ),
        worker_pool=WorkerPoolConfig(max_workers=settings.worker_pool_size or None),
        logging=logging_config,
    )

    return params, config
