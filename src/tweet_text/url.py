"""Structural URL validation.

The grammar follows the ABNF of RFC 3986.  Host rules are stricter than the
RFC: domains need at least one dot and a TLD starting with a letter.
"""

from __future__ import annotations

import re

_UNRESERVED = r"[a-z0-9\-._~]"
_PCT_ENCODED = r"(?:%[0-9a-f]{2})"
_SUB_DELIMS = r"[!$&'()*+,;=]"
_PCHAR = f"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|[:|@])"

_SCHEME = r"(?:[a-z][a-z0-9+\-.]*)"
_USERINFO = f"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)*"

_DEC_OCTET = r"(?:[0-9]|(?:[1-9][0-9])|(?:1[0-9]{2})|(?:2[0-4][0-9])|(?:25[0-5]))"
_IPV4 = f"(?:{_DEC_OCTET}(?:\\.{_DEC_OCTET}){{3}})"
# Loose: any bracketed run of hex digits, colons and dots.
_IPV6 = r"(?:\[[a-f0-9:.]+\])"
_IP = f"(?:{_IPV4}|{_IPV6})"

_SUBDOMAIN_SEGMENT = r"(?:[a-z0-9](?:[a-z0-9_\-]*[a-z0-9])?)"
_DOMAIN_SEGMENT = r"(?:[a-z0-9](?:[a-z0-9\-]*[a-z0-9])?)"
_DOMAIN_TLD = r"(?:[a-z](?:[a-z0-9\-]*[a-z0-9])?)"
_DOMAIN = f"(?:(?:{_SUBDOMAIN_SEGMENT}\\.)*(?:{_DOMAIN_SEGMENT}\\.){_DOMAIN_TLD})"
_HOST = f"(?:{_IP}|{_DOMAIN})"

# Unencoded internationalized labels; UTF-8 validity is not checked.
_NON_ASCII = r"[^\x00-\x7f]"
_UNICODE_SUBDOMAIN_SEGMENT = (
    f"(?:(?:[a-z0-9]|{_NON_ASCII})(?:(?:[a-z0-9_\\-]|{_NON_ASCII})*(?:[a-z0-9]|{_NON_ASCII}))?)"
)
_UNICODE_DOMAIN_SEGMENT = (
    f"(?:(?:[a-z0-9]|{_NON_ASCII})(?:(?:[a-z0-9\\-]|{_NON_ASCII})*(?:[a-z0-9]|{_NON_ASCII}))?)"
)
_UNICODE_DOMAIN_TLD = (
    f"(?:(?:[a-z]|{_NON_ASCII})(?:(?:[a-z0-9\\-]|{_NON_ASCII})*(?:[a-z0-9]|{_NON_ASCII}))?)"
)
_UNICODE_DOMAIN = (
    f"(?:(?:{_UNICODE_SUBDOMAIN_SEGMENT}\\.)*(?:{_UNICODE_DOMAIN_SEGMENT}\\.){_UNICODE_DOMAIN_TLD})"
)
_UNICODE_HOST = f"(?:{_IP}|{_UNICODE_DOMAIN})"

_PORT = r"[0-9]{1,5}"


def _authority(host: str) -> str:
    return f"(?:(?P<userinfo>{_USERINFO})@)?(?P<host>{host})(?::(?P<port>{_PORT}))?"


SCHEME = re.compile(_SCHEME, re.IGNORECASE)
ALLOWED_PROTOCOL = re.compile(r"https?", re.IGNORECASE)
AUTHORITY = re.compile(_authority(_HOST), re.IGNORECASE)
UNICODE_AUTHORITY = re.compile(_authority(_UNICODE_HOST), re.IGNORECASE)
PATH = re.compile(f"(?:/{_PCHAR}*)*", re.IGNORECASE)
QUERY = re.compile(f"(?:{_PCHAR}|/|\\?)*", re.IGNORECASE)
FRAGMENT = re.compile(f"(?:{_PCHAR}|/|\\?)*", re.IGNORECASE)

# RFC 3986 Appendix B, with the "//" before the authority tied to the scheme.
UNENCODED_URL = re.compile(
    r"(?:(?P<scheme>[^:/?#]+)://)?"
    r"(?P<authority>[^/?#]*)"
    r"(?P<path>[^?#]*)"
    r"(?:\?(?P<query>[^#]*))?"
    r"(?:#(?P<fragment>.*))?",
    re.IGNORECASE,
)


def _matches(pattern: re.Pattern[str], value: str | None, *, optional: bool = False) -> bool:
    if value is None:
        return optional
    return pattern.fullmatch(value) is not None


def is_valid_url(url: str, require_protocol: bool = True, allow_unicode: bool = True) -> bool:
    """Return whether the whole of *url* is a well-formed URL.

    With *require_protocol*, the scheme must be ``http`` or ``https``.
    With *allow_unicode*, host labels may contain non-ASCII characters.
    """
    if not url:
        return False
    parts = UNENCODED_URL.fullmatch(url)
    if parts is None:
        return False

    scheme, authority, path, query, fragment = parts.group(
        "scheme", "authority", "path", "query", "fragment",
    )
    if require_protocol and not (
        _matches(SCHEME, scheme) and _matches(ALLOWED_PROTOCOL, scheme)
    ):
        return False
    if path and not _matches(PATH, path):
        return False
    if not _matches(QUERY, query, optional=True):
        return False
    if not _matches(FRAGMENT, fragment, optional=True):
        return False
    if not authority:
        return False
    return _matches(UNICODE_AUTHORITY if allow_unicode else AUTHORITY, authority)
