"""Authenticated POST requests to the Redux API."""

import json
import time
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from redux.endpoints import Endpoint, url_for
from redux.errors import (
    ForbiddenError,
    HttpError,
    JsonParseError,
    NotFoundError,
    ResponseError,
    TransportError,
    UnexpectedStatusError,
)
from redux.params import encode_params
from redux.transport.config import ClientConfig
from redux.transport.constants import (
    HTTP_STATUS_ERROR_MAX,
    HTTP_STATUS_ERROR_MIN,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
)
from redux.transport.metrics import RequestMetrics
from redux.transport.redact import redact_body, redact_url_credentials


logger = structlog.get_logger()


class RequestGateway:
    """Sends requests to named endpoints and classifies the responses.

    Every request is a form-encoded POST. Single-valued parameters and the
    session token travel in the body; multi-valued parameters travel as
    repeated URL query pairs. There are no retries: every failure is raised
    to the caller.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http: httpx.Client | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Transport configuration (host, timeout, user agent).
            http: HTTP client to send requests with. When omitted, the
                gateway creates and owns one.
        """
        self._config = config or ClientConfig()
        self._owns_http = http is None
        self._http = http or httpx.Client(
            timeout=self._config.timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": self._config.user_agent},
        )
        self._metrics = RequestMetrics.get_instance()
        self._log = logger.bind(component="transport")

    @property
    def config(self) -> ClientConfig:
        """Transport configuration."""
        return self._config

    @property
    def host(self) -> str:
        """API base URL."""
        return self._config.host

    @property
    def http(self) -> httpx.Client:
        """Underlying HTTP client."""
        return self._http

    def close(self) -> None:
        """Close the HTTP client if this gateway created it."""
        if self._owns_http:
            self._http.close()

    def request(
        self,
        endpoint: Endpoint,
        params: Mapping[str, Any] | None = None,
        token: str | None = None,
        *,
        decode: bool = True,
    ) -> Any:
        """POST to an endpoint and decode the JSON response.

        Args:
            endpoint: Endpoint to call.
            params: Request parameters; None values are dropped.
            token: Session token to attach, omitted when None.
            decode: Parse the 200 response body as JSON. When False the
                body is ignored and None is returned.

        Returns:
            Decoded JSON value, or None when ``decode`` is False.

        Raises:
            ForbiddenError: On 403.
            NotFoundError: On 404.
            HttpError: On any other 4xx or 5xx.
            UnexpectedStatusError: On any status that is neither 200 nor an error.
            JsonParseError: If a 200 body is not valid JSON.
            TransportError: If no response was received.
        """
        encoded = encode_params(params)
        body = dict(encoded.body)
        if token is not None:
            body["token"] = token

        request = self._http.build_request(
            "POST",
            url_for(self.host, endpoint),
            params=encoded.query or None,
            data=body,
        )
        url = str(request.url)
        log = self._log.bind(
            endpoint=endpoint.logical_name,
            url=redact_url_credentials(url),
        )
        log.debug("request_started", body=redact_body(body))

        start_time_ns = time.perf_counter_ns()
        try:
            response = self._http.send(request, follow_redirects=True)
        except httpx.HTTPError as e:
            self._metrics.record_failure(TransportError.__name__)
            log.warning("request_failed", error=str(e))
            raise TransportError(redact_url_credentials(url), str(e)) from e

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        self._metrics.record_request(
            endpoint.logical_name, response.status_code, duration_ms
        )

        try:
            data = self._handle_response(response, url, decode=decode)
        except (ResponseError, JsonParseError) as e:
            self._metrics.record_failure(type(e).__name__)
            log.warning(
                "request_failed",
                status_code=response.status_code,
                error_kind=type(e).__name__,
                duration_ms=round(duration_ms, 2),
            )
            raise

        log.info(
            "request_complete",
            status_code=response.status_code,
            bytes=len(response.content),
            duration_ms=round(duration_ms, 2),
        )
        return data

    def _handle_response(
        self,
        response: httpx.Response,
        url: str,
        *,
        decode: bool,
    ) -> Any:
        """Classify a response by status and decode its body.

        Args:
            response: HTTP response.
            url: Request URL, carried by raised errors.
            decode: Whether to parse the body as JSON.

        Returns:
            Decoded JSON value, or None when ``decode`` is False.
        """
        check_status(response.status_code, url)
        if not decode:
            return None
        return parse_json(response.text, url)


def check_status(status_code: int, url: str) -> None:
    """Raise the error kind matching a non-200 status code.

    Args:
        status_code: HTTP status code.
        url: Request URL.

    Raises:
        ForbiddenError: On 403.
        NotFoundError: On 404.
        HttpError: On any other status in 400-599.
        UnexpectedStatusError: On any other status than 200.
    """
    if status_code == HTTP_STATUS_OK:
        return
    if status_code == HTTP_STATUS_FORBIDDEN:
        raise ForbiddenError(status_code, url)
    if status_code == HTTP_STATUS_NOT_FOUND:
        raise NotFoundError(status_code, url)
    if HTTP_STATUS_ERROR_MIN <= status_code < HTTP_STATUS_ERROR_MAX:
        raise HttpError(status_code, url)
    raise UnexpectedStatusError(status_code, url)


def parse_json(text: str, url: str) -> Any:
    """Parse a response body as JSON.

    Args:
        text: Response body.
        url: Request URL, carried by the raised error.

    Returns:
        Decoded JSON value.

    Raises:
        JsonParseError: If the body is not valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise JsonParseError(url, str(e)) from e
