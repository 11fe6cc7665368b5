"""URL canonicalization."""

from urllib.parse import unquote, urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": "80", "https": "443"}


def _strip_default_port(hostport: str, scheme: str) -> str:
    # Compare the raw port text; a malformed port is kept as-is rather than parsed
    if hostport.endswith("]"):
        return hostport
    host, sep, port = hostport.rpartition(":")
    if sep and port == _DEFAULT_PORTS.get(scheme):
        return host
    return hostport


def canonicalize(url: str) -> str:
    """
    Map equivalent spellings of a URL to one canonical form.

    - Scheme and host are lowercased
    - Default ports (:80 for http, :443 for https) are dropped
    - Trailing slashes are removed from the path, except for the root "/"
    - Query string and fragment are removed
    - Path case is preserved

    The function is pure and idempotent:
    canonicalize(canonicalize(url)) == canonicalize(url).

    Args:
        url: Absolute URL to canonicalize

    Returns:
        Canonical URL string

    Raises:
        ValueError: If the URL cannot be split (e.g. an unbalanced IPv6 bracket)
    """
    parsed = urlsplit(url)
    scheme = parsed.scheme.lower()

    netloc = parsed.netloc
    if netloc:
        userinfo, _, hostport = netloc.rpartition("@")
        host = _strip_default_port(hostport.lower(), scheme)
        netloc = f"{userinfo}@{host}" if userinfo else host

    path = parsed.path
    if len(path) > 1:
        path = path.rstrip("/") or "/"

    return urlunsplit((scheme, netloc, path, "", ""))


def url_path(url: str) -> str:
    """Return the percent-decoded path component of a URL."""
    return unquote(urlsplit(url).path)
