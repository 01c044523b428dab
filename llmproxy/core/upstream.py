from __future__ import annotations

from typing import Any

from curl_cffi import requests

from llmproxy.core.errors import (
    InvalidUpstreamResponseError,
    UpstreamRejectedError,
    UpstreamUnreachableError,
)
from llmproxy.utils.helpers import compact_json_dumps, try_parse_json
from llmproxy.utils.logger import get_logger

logger = get_logger(__name__)


BASE_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def extract_error_message(body: str) -> str:
    data = try_parse_json(body)
    if data is None:
        return body

    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        return str(message) if message else compact_json_dumps(error)
    if isinstance(error, str) and error:
        return error
    if error:
        return compact_json_dumps(error)
    return body


class UpstreamClient:
    def __init__(
        self,
        *,
        timeout: int = 30,
        session: Any = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def _headers(self, token: str) -> dict[str, str]:
        return {**BASE_HEADERS, "Authorization": f"Bearer {token}"}

    def post_json(self, url: str, *, token: str, payload: dict[str, Any], label: str) -> Any:
        try:
            resp = self._session.post(
                url,
                headers=self._headers(token),
                json=payload,
                timeout=self._timeout,
            )
        except Exception as e:
            logger.error(f"[post_json] 请求 {label} 异常: {e}")
            raise UpstreamUnreachableError(f"{label} API request failed: {e}") from e

        try:
            if not 200 <= resp.status_code < 300:
                detail = extract_error_message(resp.text)
                logger.warning(f"[post_json] {label} 返回错误, status={resp.status_code}, msg={detail}")
                raise UpstreamRejectedError(f"{label} API error: {detail}", status_code=resp.status_code)

            try:
                return resp.json()
            except Exception as e:
                logger.error(f"[post_json] {label} JSON解析异常: {e}")
                raise InvalidUpstreamResponseError(f"Invalid response from {label} API") from e
        finally:
            resp.close()
