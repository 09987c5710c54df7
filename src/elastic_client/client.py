"""
Клиент Elasticsearch.

``Client`` связывает Sender с общими параметрами соединения. Блокирующий и
асинхронный клиенты отличаются только Sender'ом: builders и классификация
ответов общие.
"""

import inspect
from typing import Any, Optional

from .core.config import ClientConfig
from .core.descriptor import RequestDescriptor
from .core.params import RequestParams
from .core.request_builder import RequestBuilder
from .core.sender import AsyncSender, Sender, SyncSender
from .endpoints.builders import (
    CreateIndexRequestBuilder,
    GetRequestBuilder,
    IndexRequestBuilder,
    PingRequestBuilder,
    PutMappingRequestBuilder,
    SearchRequestBuilder,
)


class Client:
    """
    Клиент Elasticsearch поверх произвольного Sender.

    Args:
        params: Параметры соединения для всех запросов (по умолчанию
            http://localhost:9200 без заголовков)
        sender: SyncSender или AsyncSender

    Клиент можно разделять между потоками (или задачами asyncio):
    параметры неизменяемы, Sender не хранит состояние запросов.

    Examples:
        >>> client = SyncClient(RequestParams("http://es:9200"))
        >>> res = client.request(search_request("bank")).send()
        >>> res.status
        200

        >>> async with AsyncClient() as client:
        ...     doc = await client.get_document("bank", 1).send()
    """

    def __init__(self, params: Optional[RequestParams] = None, *, sender: Sender):
        self._params = params if params is not None else RequestParams()
        self._sender = sender

    @property
    def params(self) -> RequestParams:
        """Параметры соединения клиента."""
        return self._params

    @property
    def sender(self) -> Sender:
        return self._sender

    def request(self, descriptor: RequestDescriptor, params: Optional[RequestParams] = None) -> RequestBuilder:
        """
        Создать builder для запроса.

        Args:
            descriptor: Метод, путь и тело запроса
            params: Параметры только для этого запроса, поверх параметров клиента

        Returns:
            RequestBuilder
        """
        return RequestBuilder(self._sender, self._params, descriptor, params)

    # ==================== Endpoints ====================

    def search(self, index: Optional[str] = None) -> SearchRequestBuilder:
        """Поиск. Без index - по всем индексам (``_all``)."""
        return SearchRequestBuilder(self, index)

    def get_document(self, index: str, id: Any) -> GetRequestBuilder:
        return GetRequestBuilder(self, index, id)

    def index_document(self, index: str, id: Any, doc: Any) -> IndexRequestBuilder:
        return IndexRequestBuilder(self, index, id, doc)

    def create_index(self, index: str) -> CreateIndexRequestBuilder:
        return CreateIndexRequestBuilder(self, index)

    def put_mapping(self, index: str, ty: str, mapping: Any) -> PutMappingRequestBuilder:
        return PutMappingRequestBuilder(self, index, ty, mapping)

    def ping(self) -> PingRequestBuilder:
        return PingRequestBuilder(self)

    # ==================== Жизненный цикл ====================

    def close(self):
        """
        Освободить transport.

        Для асинхронного клиента возвращает awaitable.
        """
        return self._sender.close()

    async def aclose(self) -> None:
        result = self._sender.close()
        if inspect.isawaitable(result):
            await result

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._params.base_url}>"


class SyncClient(Client):
    """
    Блокирующий клиент (requests).

    Raises:
        BuildError: Не удалось создать transport
    """

    def __init__(self, params: Optional[RequestParams] = None, config: Optional[ClientConfig] = None):
        super().__init__(params, sender=SyncSender(config))


class AsyncClient(Client):
    """
    Асинхронный клиент (httpx). ``send()`` и ``into_response()`` возвращают awaitable.

    Raises:
        BuildError: Не удалось создать transport
    """

    def __init__(self, params: Optional[RequestParams] = None, config: Optional[ClientConfig] = None):
        super().__init__(params, sender=AsyncSender(config))

    def __enter__(self):
        raise TypeError("use 'async with' with AsyncClient")

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False
