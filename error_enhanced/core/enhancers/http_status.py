"""HTTP request and response context."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from error_enhanced.core.enhancers.base import Enhancer
from error_enhanced.core.models.enums import HttpMethod
from error_enhanced.core.validation import (
    ValidHttpBody,
    ValidHttpMethod,
    ValidHttpStatusCode,
    ValidIP,
    ValidKeyedObject,
    ValidNumber,
    ValidURL,
)


class HttpStatusEnhancer(Enhancer):
    """Status code, URL, method, headers, bodies, client address and latency."""

    _field_defaults = MappingProxyType(
        {
            "_http_status_code": -1,
            "_url": "",
            "_http_method": "",
            "_request_headers": {},
            "_response_headers": {},
            "_query_params": {},
            "_request_body": None,
            "_response_body": None,
            "_client_ip": "",
            "_latency": -1,
        }
    )

    def __init__(self) -> None:
        self._reset_fields()

    @property
    def http_status_code(self) -> int:
        return self._http_status_code

    @property
    def url(self) -> str:
        return self._url

    @property
    def http_method(self) -> str:
        return self._http_method

    @property
    def request_headers(self) -> dict[str, Any]:
        return self._request_headers

    @property
    def response_headers(self) -> dict[str, Any]:
        return self._response_headers

    @property
    def query_params(self) -> dict[str, Any]:
        return self._query_params

    @property
    def request_body(self) -> Any:
        return self._request_body

    @property
    def response_body(self) -> Any:
        return self._response_body

    @property
    def client_ip(self) -> str:
        return self._client_ip

    @property
    def latency(self) -> int:
        """Request latency in milliseconds."""
        return self._latency

    def set_http_status_code(self, status_code: int) -> HttpStatusEnhancer:
        self._http_status_code = self._validated(ValidHttpStatusCode, "http_status_code", status_code)
        return self

    def set_url(self, url: str) -> HttpStatusEnhancer:
        self._validated(ValidURL, "url", url)
        self._url = url
        return self

    def set_http_method(self, method: HttpMethod | str) -> HttpStatusEnhancer:
        parsed = self._validated(ValidHttpMethod, "http_method", method, [item.value for item in HttpMethod])
        self._http_method = parsed.value
        return self

    def set_request_headers(self, headers: dict[str, Any]) -> HttpStatusEnhancer:
        self._request_headers = self._validated(ValidKeyedObject, "request_headers", headers)
        return self

    def set_response_headers(self, headers: dict[str, Any]) -> HttpStatusEnhancer:
        self._response_headers = self._validated(ValidKeyedObject, "response_headers", headers)
        return self

    def set_query_params(self, params: dict[str, Any]) -> HttpStatusEnhancer:
        self._query_params = self._validated(ValidKeyedObject, "query_params", params)
        return self

    def set_request_body(self, body: Any) -> HttpStatusEnhancer:
        self._validated(ValidHttpBody, "request_body", body)
        self._request_body = body
        return self

    def set_response_body(self, body: Any) -> HttpStatusEnhancer:
        self._validated(ValidHttpBody, "response_body", body)
        self._response_body = body
        return self

    def set_client_ip(self, ip_address: str) -> HttpStatusEnhancer:
        self._validated(ValidIP, "client_ip", ip_address)
        self._client_ip = ip_address
        return self

    def set_latency(self, latency: int) -> HttpStatusEnhancer:
        self._latency = self._validated(ValidNumber, "latency", latency)
        return self
