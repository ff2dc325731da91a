from typing import Any, Dict, Optional, Union
import json
import os
import ssl

try:
    import httpx
except ModuleNotFoundError as exc:  # pragma: no cover - user environment dependency
    raise ModuleNotFoundError(
        "Missing dependency 'httpx'. Install with: pip install httpx"
    ) from exc

from endpoints import API, BASE_URL
from .models import CallResult
from .utils import append_log_line, get_logger, redact_payload, truncate_text


def _verify_setting() -> Union[bool, ssl.SSLContext]:
    ca_bundle = os.getenv("TIMETRACKER_CA_BUNDLE")
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return True


class TrackerClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
        http_log_path: Optional[str] = None,
    ):
        self.base_url = (base_url or os.getenv("TIMETRACKER_BASE_URL") or BASE_URL).rstrip('/')
        self.timeout = timeout
        self.logger = get_logger('timetracker')
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            verify=_verify_setting(),
            transport=transport,
        )
        self.http_log_path = (
            http_log_path
            or os.getenv("TIMETRACKER_HTTP_LOG")
            or os.path.join(os.getcwd(), "timetracker_http.log")
        )

    def call(self, name: str, form: Optional[Dict[str, Any]] = None) -> CallResult:
        """Run one endpoint from the API table.

        Any received body counts as success, whatever the status code; only
        transport failures (DNS, TLS, timeout...) produce ``ok=False``.
        """
        endpoint = API[name]
        method = endpoint["method"]
        path = endpoint["path"]
        url = f"{self.base_url}{path}"
        self.logger.debug('HTTP %s %s', method, url)
        if form:
            append_log_line(self.http_log_path, f"{method} {url} payload={redact_payload(form)}")
        else:
            append_log_line(self.http_log_path, f"{method} {url}")
        try:
            resp = self._client.request(method, path, data=form or None)
        except httpx.HTTPError as exc:
            error_text = str(exc) or type(exc).__name__
            self.logger.warning('HTTP %s %s failed: %s', method, url, error_text)
            append_log_line(self.http_log_path, f"{method} {url} error={error_text}")
            return CallResult(ok=False, body=error_text)
        response_body: Any = None
        try:
            response_body = redact_payload(resp.json())
        except ValueError:
            response_body = truncate_text(resp.text or "")
        append_log_line(
            self.http_log_path,
            f"{method} {url} status={resp.status_code} response={json.dumps(response_body, ensure_ascii=True)}",
        )
        return CallResult(ok=True, body=resp.text)

    def close(self) -> None:
        self._client.close()
