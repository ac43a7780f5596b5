"""
HTTP session factory with automatic retry and backoff.

Each remote datasource builds its own ``requests.Session`` here with a retry
policy and timeout tuned to that service (see
``datasources/worldbank/client.py``).  Retries happen inside the session's
transport adapter; the preparation flow itself never retries.

Usage::

    from beyond_ols.services.http import create_session

    session = create_session(retry=Retry(total=5, backoff_factor=1), timeout=30)
    resp = session.get(url, params=params)
    resp.raise_for_status()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

if TYPE_CHECKING:
    from collections.abc import Mapping

#: Fallback policy for sources without their own: gateway errors only.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,  # 0s, 1s, 2s between retries
    status_forcelist=[502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "beyond-ols/0.1 (workshop dataset preparation)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    headers: Mapping[str, str] | None = None,
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Retry strategy for this source (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
        headers: Extra headers sent with every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    if headers:
        s.headers.update(headers)

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s
