"""
Иерархия исключений Elasticsearch клиента.

Два основных семейства:
- ApiError - Elasticsearch понял запрос и вернул структурированную ошибку
- ClientError - запрос не удалось собрать, отправить или разобрать ответ

Флаги retryable/fatal - только подсказки для вызывающего кода,
сам клиент никогда не повторяет запросы.
"""

from typing import Any, Optional

import httpx
import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ElasticClientException(Exception):
    """Базовое исключение клиента."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)


class AlreadyConsumedError(ElasticClientException):
    """
    Builder или тело ответа уже использованы.

    RequestBuilder.send() и ResponseBuilder.into_raw()/into_response()
    можно вызвать только один раз.
    """
    fatal = True

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# API ОШИБКИ (пришли от Elasticsearch)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ApiError(ElasticClientException):
    """
    Структурированная ошибка, которую вернул Elasticsearch.

    Args:
        error_type: Значение error.type из ответа
        reason: Значение error.reason
        status: HTTP статус ответа
        body: Декодированное тело ответа целиком
    """
    fatal = True

    def __init__(
        self,
        error_type: str,
        reason: Optional[str] = None,
        status: Optional[int] = None,
        body: Any = None
    ):
        self.error_type = error_type
        self.reason = reason
        self.status = status
        self.body = body

        msg = f"API error returned from Elasticsearch: {error_type}"
        if reason:
            msg += f": {reason}"
        if status is not None:
            msg += f" (status: {status})"

        super().__init__(msg)


class IndexNotFoundError(ApiError):
    """Индекс не существует (index_not_found_exception)."""

    def __init__(
        self,
        index: Optional[str],
        reason: Optional[str] = None,
        status: Optional[int] = None,
        body: Any = None
    ):
        self.index = index
        super().__init__("index_not_found_exception", reason, status, body)


class IndexAlreadyExistsError(ApiError):
    """
    Индекс уже существует.

    Elasticsearch 5.x возвращает index_already_exists_exception,
    6.x+ возвращает resource_already_exists_exception.
    """

    def __init__(
        self,
        index: Optional[str],
        reason: Optional[str] = None,
        status: Optional[int] = None,
        body: Any = None,
        error_type: str = "resource_already_exists_exception"
    ):
        self.index = index
        super().__init__(error_type, reason, status, body)


class DocumentMissingError(ApiError):
    """Документ не найден при update (document_missing_exception)."""

    def __init__(
        self,
        index: Optional[str],
        reason: Optional[str] = None,
        status: Optional[int] = None,
        body: Any = None
    ):
        self.index = index
        super().__init__("document_missing_exception", reason, status, body)


class ParsingError(ApiError):
    """
    Elasticsearch не смог разобрать тело запроса (parsing_exception).

    Args:
        line: Строка в теле запроса
        col: Колонка в теле запроса
    """

    def __init__(
        self,
        line: Optional[int],
        col: Optional[int],
        reason: Optional[str] = None,
        status: Optional[int] = None,
        body: Any = None
    ):
        self.line = line
        self.col = col
        super().__init__("parsing_exception", reason, status, body)


class MapperParsingError(ApiError):
    """Ошибка маппинга (mapper_parsing_exception)."""

    def __init__(self, reason: Optional[str] = None, status: Optional[int] = None, body: Any = None):
        super().__init__("mapper_parsing_exception", reason, status, body)


class ActionRequestValidationError(ApiError):
    """Запрос не прошёл валидацию (action_request_validation_exception)."""

    def __init__(self, reason: Optional[str] = None, status: Optional[int] = None, body: Any = None):
        super().__init__("action_request_validation_exception", reason, status, body)


class OtherApiError(ApiError):
    """Любая другая API ошибка. Детали доступны в body."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CLIENT ОШИБКИ (сборка / отправка / получение)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ClientError(ElasticClientException):
    """
    Ошибка на стороне клиента.

    Args:
        message: Сообщение
        cause: Исходное исключение (transport, JSON и т.д.)
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause

        msg = message
        if cause is not None:
            msg += f". Caused by: {cause}"

        super().__init__(msg)


class BuildError(ClientError):
    """Не удалось создать клиент или transport."""
    fatal = True

    def __init__(self, message: str = "error attempting to build a client", cause: Optional[BaseException] = None):
        super().__init__(message, cause)


class RequestError(ClientError):
    """
    Запрос не удалось отправить.

    Примеры: DNS, connection refused, таймаут, невалидный дескриптор.
    """

    def __init__(
        self,
        message: str = "error sending a request",
        url: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        self.url = url

        msg = message
        if url:
            msg += f" (url: {url})"

        super().__init__(msg, cause)


class TimeoutError(RequestError):
    """
    Таймаут запроса.

    Args:
        timeout_type: Тип таймаута ('connect', 'read' или None)
    """
    retryable = True

    def __init__(
        self,
        message: str = "request timed out",
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
        timeout_type: Optional[str] = None
    ):
        self.timeout_type = timeout_type

        msg = message
        if timeout_type:
            msg += f" ({timeout_type} timeout)"

        super().__init__(msg, url, cause)


class ConnectionError(RequestError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - Name resolution failure
    """
    retryable = True


class ClientClosedError(RequestError):
    """
    Запрос через закрытый клиент.

    После ``close()`` transport и пул декодирования освобождены,
    клиент нужно создать заново.
    """
    fatal = True

    def __init__(
        self,
        message: str = "client is closed",
        url: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message, url, cause)


class ResponseError(ClientError):
    """
    Ответ получен, но его нельзя классифицировать ни как успех,
    ни как структурированную API ошибку.

    Args:
        status: HTTP статус ответа
        message: Сообщение
        cause: Исходное исключение (например json.JSONDecodeError)
    """

    def __init__(
        self,
        status: int,
        message: str = "error receiving a response",
        cause: Optional[BaseException] = None
    ):
        self.status = status
        super().__init__(f"{message}. Status code: {status}", cause)


class ResponseTooLargeError(ResponseError):
    """
    Тело ответа больше SecurityConfig.max_response_size.

    Args:
        size: Размер ответа (bytes), прочитанный до остановки
        max_size: Максимально допустимый размер
    """
    fatal = True

    def __init__(self, status: int, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(
            status,
            f"response too large: {size} bytes (max: {max_size})"
        )

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(exc: Exception, url: str) -> ClientError:
    """
    Конвертировать requests.exceptions в наши исключения.

    Args:
        exc: Исключение из requests
        url: URL запроса

    Returns:
        RequestError (или подкласс) с исходным исключением в cause

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout()
        >>> our_exc = classify_requests_exception(exc, "http://localhost:9200")
        >>> assert isinstance(our_exc, TimeoutError)
        >>> assert our_exc.timeout_type == "connect"
    """
    if isinstance(exc, requests.exceptions.ConnectTimeout):
        return TimeoutError("request timed out", url, exc, timeout_type="connect")

    elif isinstance(exc, requests.exceptions.ReadTimeout):
        return TimeoutError("request timed out", url, exc, timeout_type="read")

    elif isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("request timed out", url, exc)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("connection error", url, exc)

    elif isinstance(exc, (
        requests.exceptions.InvalidURL,
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidHeader,
    )):
        return RequestError("invalid request", url, exc)

    else:
        # Неизвестная ошибка - оборачиваем
        return RequestError("error sending a request", url, exc)


def classify_httpx_exception(exc: Exception, url: str) -> ClientError:
    """
    Конвертировать httpx исключения в наши исключения.

    Args:
        exc: Исключение из httpx
        url: URL запроса

    Returns:
        RequestError (или подкласс) с исходным исключением в cause
    """
    if isinstance(exc, httpx.ConnectTimeout):
        return TimeoutError("request timed out", url, exc, timeout_type="connect")

    elif isinstance(exc, httpx.ReadTimeout):
        return TimeoutError("request timed out", url, exc, timeout_type="read")

    elif isinstance(exc, httpx.TimeoutException):
        return TimeoutError("request timed out", url, exc)

    elif isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ConnectionError("connection error", url, exc)

    elif isinstance(exc, (httpx.UnsupportedProtocol, httpx.InvalidURL, httpx.LocalProtocolError)):
        return RequestError("invalid request", url, exc)

    else:
        return RequestError("error sending a request", url, exc)
