"""Authentication request sending service."""

from __future__ import annotations

import json
import logging
import time

import httpx

from auth_contract_tester.configuration.runtime_settings import (
    DEFAULT_ENDPOINT_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    TargetSettings,
)
from auth_contract_tester.credential_fixtures.fixture_models import CredentialSet

from .exchange_records import RequestContext, ResponseRecord

LOGGER = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class TransportError(Exception):
    """Raised when the authentication endpoint cannot be reached."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Could not reach {url}: {type(cause).__name__}: {cause}")


class HarnessNotConfiguredError(RuntimeError):
    """Raised when ``send`` is called before ``configure``."""


class AuthContractHarness:
    """Sends one authentication request per call and captures the response.

    The harness holds its target as instance state; nothing is shared at module
    level, so one harness per scenario thread is safe. Failures are never
    retried.
    """

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_client = client is None
        self._timeout_seconds = timeout_seconds
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._target: TargetSettings | None = None

    @classmethod
    def from_settings(
        cls, settings: TargetSettings, *, client: httpx.Client | None = None
    ) -> AuthContractHarness:
        harness = cls(client=client, timeout_seconds=settings.timeout_seconds)
        harness.configure(settings.base_uri, settings.endpoint_path)
        return harness

    @property
    def target(self) -> TargetSettings | None:
        return self._target

    def configure(self, base_uri: str, endpoint_path: str = DEFAULT_ENDPOINT_PATH) -> None:
        if not base_uri:
            raise ValueError("base_uri must not be empty.")
        if not endpoint_path.startswith("/"):
            endpoint_path = f"/{endpoint_path}"
        self._target = TargetSettings(
            base_uri=base_uri.rstrip("/"),
            endpoint_path=endpoint_path,
            timeout_seconds=self._timeout_seconds,
        )
        LOGGER.debug("Harness target set to %s", self._target.url)

    def send(self, credentials: CredentialSet) -> ResponseRecord:
        if self._target is None:
            raise HarnessNotConfiguredError("configure() must be called before send().")

        context = RequestContext(
            method="POST",
            url=self._target.url,
            headers=(("Content-Type", JSON_CONTENT_TYPE),),
            body=json.dumps(credentials.as_request_body()),
        )
        LOGGER.info("POST %s with fixture '%s'", context.url, credentials.name)
        LOGGER.debug("Request body: %s", _masked_body(credentials))

        started = time.perf_counter()
        try:
            response = self._client.request(
                context.method,
                context.url,
                headers=dict(context.headers),
                content=context.body.encode("utf-8"),
            )
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            LOGGER.error("Transport failure for %s: %s", context.url, exc)
            raise TransportError(context.url, exc) from exc
        elapsed_ms = (time.perf_counter() - started) * 1000

        record = ResponseRecord(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            headers=tuple(response.headers.multi_items()),
            text=response.text,
            elapsed_ms=elapsed_ms,
            request=context,
        )
        _log_response(record)
        return record

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> AuthContractHarness:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _masked_body(credentials: CredentialSet) -> dict[str, str]:
    body = credentials.as_request_body()
    if body.get("password"):
        body["password"] = "***"
    return body


def _log_response(record: ResponseRecord) -> None:
    LOGGER.info("%s in %.0f ms", record.status_line, record.elapsed_ms)
    if LOGGER.isEnabledFor(logging.DEBUG):
        for name, value in record.headers:
            LOGGER.debug("  %s: %s", name, value)
        LOGGER.debug("Response body (%d characters): %s", len(record.text), record.text)
