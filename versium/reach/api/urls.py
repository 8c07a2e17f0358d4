"""Request URL and header construction for REACH endpoints."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote, urlencode

API_KEY_HEADER = "x-versium-api-key"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(
    inputs: Mapping[str, Any],
    output_types: Sequence[str] = (),
    extra: Mapping[str, Any] | None = None,
) -> list[tuple[str, str]]:
    """Flatten inputs, output types and extra parameters into query pairs.

    List values are sent as repeated ``key[]`` parameters and every output
    type as an ``output[]`` parameter. ``extra`` entries go last.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in inputs.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((f"{key}[]", _query_value(item)) for item in value)
        else:
            pairs.append((key, _query_value(value)))
    pairs.extend(("output[]", str(output)) for output in output_types)
    if extra:
        pairs.extend((key, _query_value(value)) for key, value in extra.items())
    return pairs


def build_api_url(
    base_url: str,
    version: int,
    tool: str,
    inputs: Mapping[str, Any],
    output_types: Sequence[str] = (),
    extra: Mapping[str, Any] | None = None,
) -> str:
    """Build the full URL for one call to ``tool``.

    Example:
        >>> build_api_url("https://api.versium.com", 2, "contact",
        ...               {"email": "a@b.com"}, ["phone"])
        'https://api.versium.com/v2/contact?email=a%40b.com&output%5B%5D=phone'
    """
    url = f"{base_url.rstrip('/')}/v{version}/{quote(str(tool), safe='')}"
    query = urlencode(build_query(inputs, output_types, extra))
    return f"{url}?{query}" if query else url


def build_headers(api_key: str, *, accept_json: bool = True) -> dict[str, str]:
    headers = {API_KEY_HEADER: api_key}
    if accept_json:
        headers["Accept"] = "application/json"
    return headers
