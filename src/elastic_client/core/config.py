"""
Конфигурация transport уровня для Elasticsearch клиента.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
Параметры запроса (base_url, заголовки, url параметры) живут отдельно
в RequestParams - они переопределяются на уровне запроса, а ClientConfig
фиксируется при создании Sender.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .logging import LoggingConfig

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class TimeoutConfig:
    """
    Таймауты одного запроса.

    Args:
        connect: Установка TCP/TLS соединения с узлом (сек)
        read: Ожидание очередной порции ответа (сек). Тяжелые агрегации
            и ``_search`` по большим индексам могут требовать больше 30с.

    Превышение любого из них - TimeoutError (подкласс RequestError).

    Examples:
        >>> TimeoutConfig(connect=2, read=120)
    """
    connect: float = 5
    read: float = 30

    def __post_init__(self):
        _require_positive(connect=self.connect, read=self.read)

    def as_tuple(self) -> Tuple[float, float]:
        """``(connect, read)`` в формате ``timeout=`` для requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONNECTION POOL CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ConnectionPoolConfig:
    """
    Пул соединений с кластером.

    Args:
        pool_connections: requests - число пулов (по одному на хост);
            httpx - max_keepalive_connections
        pool_maxsize: requests - соединений на хост; httpx - max_connections
        pool_block: Только requests: ждать свободное соединение вместо
            открытия лишнего
        max_redirects: Лимит редиректов (прокси перед кластером)
    """
    pool_connections: int = 10
    pool_maxsize: int = 10
    pool_block: bool = False
    max_redirects: int = 30

    def __post_init__(self):
        _require_positive(pool_connections=self.pool_connections, pool_maxsize=self.pool_maxsize)
        if self.max_redirects < 0:
            raise ValueError("max_redirects must be non-negative")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECURITY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class SecurityConfig:
    """
    Конфигурация безопасности.

    Args:
        verify_ssl: Проверять SSL сертификаты
        ca_bundle: Путь к CA bundle (None = системные сертификаты)
        client_cert: Путь к клиентскому сертификату
        client_key: Путь к ключу клиентского сертификата
        allow_redirects: Разрешать редиректы
        max_response_size: Максимальный размер тела ответа (байты)

    Examples:
        >>> SecurityConfig(verify_ssl=False)  # Для тестов
        >>> SecurityConfig(ca_bundle="/etc/es/ca.pem")
    """
    verify_ssl: bool = True
    ca_bundle: Optional[str] = None
    client_cert: Optional[str] = None
    client_key: Optional[str] = None
    allow_redirects: bool = True
    max_response_size: int = 100 * 1024 * 1024  # 100MB

    def __post_init__(self):
        """Валидация."""
        if self.max_response_size <= 0:
            raise ValueError("max_response_size must be positive")
        if self.client_key and not self.client_cert:
            raise ValueError("client_key requires client_cert")

    def requests_verify(self) -> Union[bool, str]:
        """Значение verify для requests."""
        if not self.verify_ssl:
            return False
        return self.ca_bundle or True

    def requests_cert(self) -> Optional[Union[str, Tuple[str, str]]]:
        """Значение cert для requests."""
        if self.client_cert and self.client_key:
            return (self.client_cert, self.client_key)
        return self.client_cert

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# WORKER POOL CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class WorkerPoolConfig:
    """
    Пул потоков для декодирования ответов в AsyncSender.

    Args:
        max_workers: Размер пула. None или 0 - декодирование inline,
            в потоке event loop.

    Задачи встают в очередь, когда все потоки заняты.

    Examples:
        >>> WorkerPoolConfig()  # inline
        >>> WorkerPoolConfig(max_workers=4)
    """
    max_workers: Optional[int] = None

    def __post_init__(self):
        """Валидация."""
        if self.max_workers is not None and self.max_workers < 0:
            raise ValueError("max_workers must be non-negative")

    @property
    def enabled(self) -> bool:
        return bool(self.max_workers)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация Sender.

    Args:
        timeout: Конфигурация таймаутов
        pool: Конфигурация connection pool
        security: Конфигурация безопасности
        worker_pool: Пул для декодирования (только AsyncSender)
        logging: Конфигурация логирования (None = без логирования)

    Examples:
        >>> config = ClientConfig()
        >>> config = ClientConfig.create(timeout=60, worker_pool_size=4)
    """
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    pool: ConnectionPoolConfig = field(default_factory=ConnectionPoolConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    worker_pool: WorkerPoolConfig = field(default_factory=WorkerPoolConfig)
    logging: Optional['LoggingConfig'] = None

    @classmethod
    def create(
        cls,
        timeout: Union[float, Tuple[float, float], TimeoutConfig] = 30,
        verify_ssl: bool = True,
        ca_bundle: Optional[str] = None,
        client_cert: Optional[str] = None,
        client_key: Optional[str] = None,
        max_response_size: Optional[int] = None,
        pool_maxsize: Optional[int] = None,
        worker_pool_size: Optional[int] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'ClientConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            timeout: Таймаут (число, (connect, read) или TimeoutConfig)
            verify_ssl: Проверять SSL
            ca_bundle: Путь к CA bundle
            client_cert: Клиентский сертификат
            client_key: Ключ клиентского сертификата
            max_response_size: Максимальный размер ответа
            pool_maxsize: Максимальный размер connection pool
            worker_pool_size: Размер пула декодирования (None = inline)
            logging: Конфигурация логирования

        Examples:
            >>> config = ClientConfig.create(timeout=(3, 60), verify_ssl=False)
        """
        security_kwargs = {}
        if max_response_size is not None:
            security_kwargs['max_response_size'] = max_response_size

        pool_cfg = ConnectionPoolConfig(pool_maxsize=pool_maxsize) if pool_maxsize else ConnectionPoolConfig()

        return cls(
            timeout=_to_timeout(timeout),
            pool=pool_cfg,
            security=SecurityConfig(
                verify_ssl=verify_ssl,
                ca_bundle=ca_bundle,
                client_cert=client_cert,
                client_key=client_key,
                **security_kwargs
            ),
            worker_pool=WorkerPoolConfig(max_workers=worker_pool_size),
            logging=logging,
        )

    def with_timeout(self, timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> 'ClientConfig':
        """
        Создать новый конфиг с изменённым timeout.

        Example:
            >>> new_config = config.with_timeout(60)
        """
        return replace(self, timeout=_to_timeout(timeout))

    def with_worker_pool(self, max_workers: Optional[int]) -> 'ClientConfig':
        """Создать новый конфиг с другим размером пула декодирования."""
        return replace(self, worker_pool=WorkerPoolConfig(max_workers=max_workers))

    def with_logging(self, logging: Optional['LoggingConfig']) -> 'ClientConfig':
        """Создать новый конфиг с другой конфигурацией логирования."""
        return replace(self, logging=logging)


def _to_timeout(timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> TimeoutConfig:
    if isinstance(timeout, TimeoutConfig):
        return timeout
    if isinstance(timeout, tuple):
        return TimeoutConfig(connect=timeout[0], read=timeout[1])
    return TimeoutConfig(connect=5, read=timeout)
