"""HTTP client that sends JSON and multipart requests to the game backend."""

from __future__ import annotations

import json
import platform
import re
import urllib.error
import urllib.request
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from lootserver.logger import LogLevel, ServerLogger

__all__ = [
    "ErrorData",
    "ServerResponse",
    "HttpRequest",
    "HttpClient",
    "response_is_valid",
    "parse_response",
    "build_multipart_body",
    "format_failed_request_log",
    "format_successful_request_log",
]

DEFAULT_BOUNDARY = "lootlockerboundary"

Transport = Callable[[str, str, Mapping[str, str], bytes], "tuple[Optional[int], str, Mapping[str, str]]"]


@dataclass
class ErrorData:
    """Structured error information returned by the server."""

    code: str = ""
    message: str = ""
    doc_url: str = ""
    request_id: str = ""
    trace_id: str = ""
    retry_after_seconds: Optional[int] = None

    @classmethod
    def from_text(cls, text: str) -> "ErrorData":
        """Read error fields from a JSON body; anything unreadable yields empty data."""
        try:
            payload = json.loads(text)
        except (ValueError, TypeError):
            return cls()
        if not isinstance(payload, dict):
            return cls()
        lowered = {str(key).lower(): value for key, value in payload.items()}

        def text_field(name: str) -> str:
            value = lowered.get(name)
            return value if isinstance(value, str) else ""

        retry = lowered.get("retry_after_seconds")
        return cls(
            code=text_field("code"),
            message=text_field("message"),
            doc_url=text_field("doc_url"),
            request_id=text_field("request_id"),
            trace_id=text_field("trace_id"),
            retry_after_seconds=retry if isinstance(retry, int) and not isinstance(retry, bool) else None,
        )


@dataclass
class ServerResponse:
    """Outcome of a request to the server."""

    success: bool = False
    status_code: int = 0
    full_text: str = ""
    error: str = ""
    error_data: ErrorData = field(default_factory=ErrorData)

    @classmethod
    def error_response(cls, message: str) -> "ServerResponse":
        """Build a failed response carrying ``message`` without contacting the server."""
        return cls(success=False, error=message, error_data=ErrorData(message=message))


@dataclass
class HttpRequest:
    """A request to send: endpoint, verb, body, extra headers and a completion callback."""

    endpoint: str
    method: str = "GET"
    data: str = ""
    custom_headers: dict = field(default_factory=dict)
    on_complete: Optional[Callable[[ServerResponse], None]] = None


def response_is_valid(status_code: Optional[int], was_successful: bool) -> bool:
    """True when the request completed and the status code is a 2xx success (200-206)."""
    if not was_successful or status_code is None:
        return False
    return 200 <= status_code <= 206


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _header(headers: Mapping[str, str], name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def parse_response(
    status_code: Optional[int],
    body: str,
    headers: Mapping[str, str],
    was_successful: bool,
) -> ServerResponse:
    """Turn raw transport output into a ServerResponse, filling error details on failure."""
    response = ServerResponse(
        success=response_is_valid(status_code, was_successful),
        status_code=status_code or 0,
        full_text=body,
    )
    if response.success:
        return response
    response.error_data = ErrorData.from_text(body)
    if not response.error_data.code:
        response.error_data.message = body
    response.error = response.error_data.message
    retry_after = _header(headers, "retry-after")
    if retry_after:
        response.error_data.retry_after_seconds = _atoi(retry_after)
    return response


def build_multipart_body(
    raw_data: bytes,
    file_name: str,
    additional_fields: Mapping[str, str],
    boundary: str = DEFAULT_BOUNDARY,
) -> bytes:
    """Encode form fields followed by one file part as a multipart/form-data body."""
    begin = f"\r\n--{boundary}\r\n".encode()
    end = f"\r\n--{boundary}--\r\n".encode()
    parts = []
    for key, value in additional_fields.items():
        parts.append(begin)
        parts.append(
            (
                'Content-Type: text/plain; charset="utf-8"\r\n'
                f'Content-Disposition: form-data; name="{key}"\r\n\r\n'
                f"{value}"
            ).encode()
        )
    parts.append(begin)
    parts.append(
        (
            "Content-Type: application/octet-stream\r\n"
            f'Content-disposition: form-data; name="file"; filename="{file_name}"\r\n\r\n'
        ).encode()
    )
    parts.append(bytes(raw_data))
    parts.append(end)
    return b"".join(parts)


def _headers_section(response_headers: Sequence[str]) -> str:
    if not response_headers:
        return ""
    return "\n   -- Response Headers --" + "".join(f"\n     {h}" for h in response_headers)


def format_failed_request_log(
    response: ServerResponse,
    method: str,
    endpoint: str,
    data: str,
    response_headers: Sequence[str],
) -> str:
    """Describe a failed request for the warning log."""
    text = f"{method} request to {endpoint} failed"
    error = response.error_data
    informative = bool(error.code)
    if informative:
        text += f"\n   {error.message}"
        text += f"\n    Error Code: {error.code}"
        text += f"\n    Further Information: {error.doc_url}"
        text += f"\n    Request ID: {error.request_id}"
        text += f"\n    Trace ID: {error.trace_id}"
    text += f"\n   HTTP Status code : {response.status_code}"
    if data:
        text += f"\n   Request Data: {data}"
    text += _headers_section(response_headers)
    if not informative:
        text += f"\n   Response Data: {response.full_text}"
    return text + "\n###"


def format_successful_request_log(
    response: ServerResponse,
    method: str,
    endpoint: str,
    data: str,
    response_headers: Sequence[str],
) -> str:
    """Describe a successful request for the very verbose log."""
    text = f"{method} request to {endpoint} succeeded"
    text += f"\n   HTTP Status code : {response.status_code}"
    if data:
        text += f"\n   Request Data: {data}"
    text += _headers_section(response_headers)
    text += f"\n   Response Data: {response.full_text}"
    return text + "\n###"


def _urllib_transport(method: str, url: str, headers: Mapping[str, str], body: bytes):
    req = urllib.request.Request(url, data=body or None, headers=dict(headers), method=method)
    try:
        with urllib.request.urlopen(req) as reply:
            return reply.status, reply.read().decode("utf-8", "replace"), dict(reply.headers.items())
    except urllib.error.HTTPError as exc:
        reply_headers = dict(exc.headers.items()) if exc.headers is not None else {}
        return exc.code, exc.read().decode("utf-8", "replace"), reply_headers


class HttpClient:
    """Sends requests through a transport and reports results as ServerResponse."""

    def __init__(
        self,
        sdk_version: str = "",
        api_version: str = "",
        logger: Optional[ServerLogger] = None,
        transport: Optional[Transport] = None,
    ):
        self.sdk_version = sdk_version
        self.api_version = api_version
        self.logger = logger if logger is not None else ServerLogger()
        self.transport = transport if transport is not None else _urllib_transport
        self.user_agent = f"X-LootServer-Agent/{platform.python_version()}"
        self.user_instance_identifier = str(uuid.uuid4())
        if sdk_version:
            self.logger.log(f"LootLockerServer version: v{sdk_version}", LogLevel.VERBOSE)

    def default_headers(self) -> dict:
        """Headers sent with every JSON request, before custom headers are applied."""
        return {
            "User-Agent": self.user_agent,
            "User-Instance-Identifier": self.user_instance_identifier,
            "SDK-Version": self.sdk_version,
            "Content-Type": "application/json",
            "Accepts": "application/json",
            "LL-Version": self.api_version,
        }

    def send_request(self, request: HttpRequest) -> ServerResponse:
        """Send a JSON request and return (and hand to the callback) its response."""
        headers = self.default_headers()
        headers.update(request.custom_headers)
        return self._dispatch(request, headers, request.data.encode("utf-8"), request.data, request.data)

    def upload_file(
        self, file_path: str, additional_fields: Mapping[str, str], request: HttpRequest
    ) -> ServerResponse:
        """Upload the file at ``file_path`` as a multipart form with extra fields."""
        try:
            raw_data = Path(file_path).read_bytes()
        except OSError:
            response = ServerResponse.error_response(f"Could not read file {file_path}")
            if request.on_complete is not None:
                request.on_complete(response)
            return response
        file_name = str(file_path).rpartition("/")[2]
        return self.upload_raw_file(raw_data, file_name, additional_fields, request)

    def upload_raw_file(
        self,
        raw_data: bytes,
        file_name: str,
        additional_fields: Mapping[str, str],
        request: HttpRequest,
    ) -> ServerResponse:
        """Upload in-memory bytes as a file part of a multipart form."""
        headers = {
            "User-Agent": self.user_agent,
            "User-Instance-Identifier": self.user_instance_identifier,
            "SDK-Version": self.sdk_version,
            "Content-Type": f"multipart/form-data; boundary={DEFAULT_BOUNDARY}",
        }
        headers.update(request.custom_headers)
        body = build_multipart_body(raw_data, file_name, additional_fields, DEFAULT_BOUNDARY)
        return self._dispatch(request, headers, body, "File Content", "Data Stream")

    def _dispatch(
        self,
        request: HttpRequest,
        headers: Mapping[str, str],
        body: bytes,
        shown_content: str,
        logged_data: str,
    ) -> ServerResponse:
        delimited = "".join(f"    {key}: {value}\n" for key, value in headers.items())
        self.logger.log(
            f"Request {request.method} to endpoint {request.endpoint}\n"
            f"  With headers {delimited}\n  And with content: {shown_content}",
            LogLevel.VERBOSE,
        )
        try:
            status, text, reply_headers = self.transport(request.method, request.endpoint, headers, body)
            was_successful = True
        except OSError:
            status, text, reply_headers, was_successful = 0, "", {}, False

        response = parse_response(status, text, reply_headers, was_successful)
        header_lines = [f"{key}: {value}" for key, value in reply_headers.items()]
        development = self.logger.settings.development
        shown_headers = header_lines if development else []
        if not response.success:
            self.logger.log(
                format_failed_request_log(response, request.method, request.endpoint, logged_data, shown_headers),
                LogLevel.WARNING,
            )
        elif development:
            self.logger.log(
                format_successful_request_log(response, request.method, request.endpoint, logged_data, shown_headers),
                LogLevel.VERY_VERBOSE,
            )
        if request.on_complete is not None:
            request.on_complete(response)
        return response