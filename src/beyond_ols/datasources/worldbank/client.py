"""World Bank API v2 client: URLs, indicator codes, paginated GET.

API docs: https://datahelpdesk.worldbank.org/knowledgebase/topics/125589

Every JSON response is a two-element list ``[page_info, records]``.  Errors
come back with HTTP 200 and a single ``{"message": [...]}`` element instead.
"""

from __future__ import annotations

from typing import Any

from urllib3.util.retry import Retry

from beyond_ols.services.http import create_session

WORLD_BANK_API = "https://api.worldbank.org/v2"

# Indicator codes keyed by the column name they get in our tables
INDICATORS: dict[str, str] = {
    "population": "SP.POP.TOTL",
    "gdp_per_cap": "NY.GDP.PCAP.KD",
}

PER_PAGE = 10_000

#: The API throttles bursts with 429 (honouring Retry-After) and answers
#: 500/502/503 while large indicator pages are being rendered.
WORLD_BANK_RETRY = Retry(
    total=5,
    backoff_factor=2,  # 0s, 2s, 4s, 8s, 16s between retries
    status_forcelist=[429, 500, 502, 503, 504],
    allowed_methods=["GET"],
    respect_retry_after_header=True,
    raise_on_status=False,
)

# Full-range indicator pages (10k rows) are slow to render
WORLD_BANK_TIMEOUT = 60

session = create_session(
    retry=WORLD_BANK_RETRY,
    timeout=WORLD_BANK_TIMEOUT,
    headers={"Accept": "application/json"},
)


class WorldBankError(RuntimeError):
    """The API answered, but with an error payload instead of data."""


def _check_payload(payload: Any, url: str) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    if not isinstance(payload, list) or not payload:
        msg = f"Unexpected World Bank response from {url}: {payload!r}"
        raise WorldBankError(msg)

    first = payload[0]
    if isinstance(first, dict) and "message" in first:
        messages = first.get("message") or []
        detail = "; ".join(
            f"{m.get('id', '?')} {m.get('key', '')}: {m.get('value', '')}".strip()
            for m in messages
        )
        msg = f"World Bank API error for {url}: {detail or first!r}"
        raise WorldBankError(msg)

    # A query with no matches returns [page_info, null]
    records = payload[1] if len(payload) > 1 and payload[1] else []
    return first, records


def get_all_pages(path: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
    """GET every page of a World Bank endpoint and concatenate the records.

    Args:
        path: Path below ``WORLD_BANK_API`` (e.g. ``"country"``).
        params: Extra query parameters (``format``/``per_page``/``page`` are set here).

    Returns:
        All records across pages, in API order.

    Raises:
        requests.HTTPError: If a page request fails after retries.
        WorldBankError: If the API returns an error payload or a non-JSON body.
    """
    url = f"{WORLD_BANK_API}/{path}"
    query: dict[str, Any] = {**(params or {}), "format": "json", "per_page": PER_PAGE}

    results: list[dict[str, Any]] = []
    page = 1
    while True:
        query["page"] = page
        resp = session.get(url, params=query)
        resp.raise_for_status()
        try:
            payload = resp.json()
        except ValueError as e:
            # Maintenance pages come back as HTML with status 200
            msg = f"World Bank response from {url} is not JSON: {resp.text[:200]!r}"
            raise WorldBankError(msg) from e
        info, records = _check_payload(payload, url)
        results.extend(records)

        pages = int(info.get("pages") or 1)
        if page >= pages:
            break
        page += 1

    return results
