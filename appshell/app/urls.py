"""URL normalization and default-URL selection."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from appshell.shared.core.configuration import DEFAULT_URL

logger = logging.getLogger(__name__)

SETTINGS_FEATURE = "features/base/settings"

# Descriptor keys whose entries become ``<prefix>.<key>=<json>`` fragment params.
_FRAGMENT_SECTIONS = (
    ("config", "config"),
    ("interface_config", "interfaceConfig"),
    ("interfaceConfig", "interfaceConfig"),
)


def _with_scheme(uri: str) -> str:
    if uri and "://" not in uri:
        return "https://" + uri.lstrip("/")
    return uri


def _descriptor_to_string(descriptor: Mapping[str, Any]) -> str:
    base = descriptor.get("url") or ""
    server = (
        descriptor.get("server_url")
        or descriptor.get("serverURL")
        or descriptor.get("domain")
        or descriptor.get("host")
    )
    if not base:
        base = server or ""
    if not base:
        return ""

    scheme, netloc, path, query, fragment = urlsplit(_with_scheme(str(base)))

    room = descriptor.get("room")
    if room:
        path = path.rstrip("/") + "/" + quote(str(room))

    jwt = descriptor.get("jwt")
    if jwt:
        query = "&".join(filter(None, [query, urlencode({"jwt": jwt})]))

    params: List[str] = [fragment] if fragment else []
    for key, prefix in _FRAGMENT_SECTIONS:
        section = descriptor.get(key)
        if isinstance(section, Mapping):
            params.extend(
                f"{prefix}.{name}={quote(json.dumps(value))}"
                for name, value in section.items()
            )

    return urlunsplit((scheme, netloc, path, query, "&".join(params)))


def to_url_string(raw: Any) -> str:
    """Turn whatever the host passed as ``url`` into a URL string.

    ``None`` becomes ``""``; strings pass through; ``urllib`` split/parse
    results are re-joined; mappings are treated as a descriptor with ``url``,
    ``server_url``, ``room``, ``jwt`` and ``config`` entries.
    """
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if hasattr(raw, "geturl"):
        return raw.geturl()
    if isinstance(raw, Mapping):
        return _descriptor_to_string(raw)
    return str(raw)


def resolve_default(
    explicit_default: Optional[str],
    state: Optional[Mapping[str, Any]],
    location: Any = None,
    fallback: str = DEFAULT_URL,
) -> str:
    """Pick the URL to open when the host did not name one.

    In order: the host's own current location, ``explicit_default``, the
    server URL from persisted settings, ``fallback``.
    """
    if location is not None:
        href = str(location)
        if href:
            return href

    if explicit_default:
        return explicit_default

    settings: Dict[str, Any] = dict((state or {}).get(SETTINGS_FEATURE) or {})
    server_url = settings.get("server_url")
    if server_url:
        return server_url

    return fallback
