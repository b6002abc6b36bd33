"""URL decomposition and resolution, and host name lookup."""

import socket
from urllib.parse import unquote, urljoin, urlsplit, urlunsplit, uses_relative

from ._generic import to_string


def _split_host(host: str) -> tuple[str, str]:
    """Split `host[:port]` into hostname and port, unwrapping IPv6 brackets."""
    if host.startswith("["):
        closing = host.find("]")
        if closing < 0:
            return host, ""
        hostname, rest = host[1:closing], host[closing + 1 :]
        port = rest[1:] if rest.startswith(":") else ""
        return hostname, port if port.isdigit() else ""
    hostname, colon, port = host.rpartition(":")
    if not colon:
        return host, ""
    if port and not port.isdigit():
        return host, ""
    return hostname, port


def url_parse(url: object) -> dict[str, str]:
    """Decompose a URL into its components.

    Path and fragment are percent-decoded; the query string is left raw.
    Unparseable URLs yield an empty dict.
    """
    try:
        parts = urlsplit(to_string(url))
    except ValueError:
        return {}
    userinfo, at, host = parts.netloc.rpartition("@")
    if not at:
        userinfo, host = "", parts.netloc
    hostname, port = _split_host(host)
    return {
        "scheme": parts.scheme,
        "host": host,
        "hostname": hostname,
        "port": port,
        "path": unquote(parts.path),
        "query": parts.query,
        "fragment": unquote(parts.fragment),
        "userinfo": userinfo,
    }


def url_join(base: object, ref: object) -> str:
    """Resolve `ref` against `base` per RFC 3986, whatever the scheme."""
    base_text, ref_text = to_string(base), to_string(ref)
    try:
        parts = urlsplit(base_text)
        scheme = parts.scheme
        if not scheme or scheme in uses_relative or urlsplit(ref_text).scheme:
            return urljoin(base_text, ref_text)
        # urljoin only resolves schemes it knows, so resolve as http and swap back
        joined = urljoin(urlunsplit(parts._replace(scheme="http")), ref_text)
    except ValueError:
        return ""
    return scheme + joined[len("http") :]


def get_host_by_name(name: object) -> str:
    """Return the first address the resolver reports, or "" on failure."""
    try:
        infos = socket.getaddrinfo(to_string(name), None)
    except (OSError, UnicodeError):
        return ""
    for _family, _type, _proto, _canonname, sockaddr in infos:
        return str(sockaddr[0])
    return ""
