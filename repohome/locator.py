"""Remote locator parsing: turn a clone address into structured fields.

Three notations are understood, tried in this order:

* scheme-qualified URLs: ``ssh://``, ``git://``, ``http(s)://``,
  ``ftp(s)://`` and ``file://``
* the scp-like shorthand ``[user@]host:path`` (``host:~account/path``
  names another account's area on the host)
* anything else is a local filesystem path

Parsing is lossless: ``path`` keeps the leading ``/`` and the ``.git``
suffix exactly as written. Stripping them is the layout's job.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from repohome.errors import (
    EmptyHost,
    InvalidLocator,
    InvalidPort,
    MalformedShorthand,
    UnsupportedScheme,
)

LOCAL_HOST = "local"

_SCHEME_FIRST = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_SCHEME_REST = _SCHEME_FIRST | frozenset("0123456789+.-")


@dataclass(frozen=True)
class RemoteLocator:
    """Common accessors; concrete variants are the subclasses below."""

    def effective_account(self) -> str:
        return getattr(self, "account", None) or ""

    def effective_host(self) -> str:
        return getattr(self, "host", LOCAL_HOST)

    def raw_path(self) -> str:
        return self.path  # type: ignore[attr-defined]


@dataclass(frozen=True)
class Ssh(RemoteLocator):
    host: str
    path: str
    user: Optional[str] = None
    port: Optional[int] = None
    account: Optional[str] = None


@dataclass(frozen=True)
class GitTransport(RemoteLocator):
    host: str
    path: str
    port: Optional[int] = None
    account: Optional[str] = None


@dataclass(frozen=True)
class Http(RemoteLocator):
    secure: bool
    host: str
    path: str
    port: Optional[int] = None


@dataclass(frozen=True)
class Ftp(RemoteLocator):
    secure: bool
    host: str
    path: str
    port: Optional[int] = None


@dataclass(frozen=True)
class File(RemoteLocator):
    path: str


def _split_scheme(raw: str) -> Optional[str]:
    """Return the scheme token if raw starts with ``scheme://``."""
    scheme, sep, _ = raw.partition("://")
    if not sep or not scheme:
        return None
    if scheme[0] not in _SCHEME_FIRST or any(c not in _SCHEME_REST for c in scheme[1:]):
        return None
    return scheme


def _split_netloc(netloc: str) -> tuple[Optional[str], str, Optional[int]]:
    """Split ``[user[:password]@]host[:port]`` into (user, host, port)."""
    userinfo, at, hostport = netloc.rpartition("@")
    user = userinfo.partition(":")[0] if at else None

    if hostport.startswith("["):
        # IPv6 literal: [::1]:2222
        end = hostport.find("]")
        host = hostport[: end + 1] if end != -1 else hostport
        rest = hostport[end + 1:] if end != -1 else ""
        port_text = rest[1:] if rest.startswith(":") else None
    else:
        host, colon, port_text = hostport.partition(":")
        if not colon:
            port_text = None

    port: Optional[int] = None
    if port_text:
        if not (port_text.isascii() and port_text.isdecimal()) or int(port_text) > 65535:
            raise InvalidPort(port_text)
        port = int(port_text)

    return user or None, host, port


def _parse_scheme(raw: str, scheme: str) -> RemoteLocator:
    name = scheme.lower()
    try:
        parts = urlsplit(raw)
    except ValueError as exc:
        raise InvalidLocator(str(exc)) from exc

    if name == "file":
        return File(path=parts.path)
    if name not in ("ssh", "git", "http", "https", "ftp", "ftps"):
        raise UnsupportedScheme(scheme)

    user, host, port = _split_netloc(parts.netloc)
    if not host:
        raise EmptyHost(name)

    if name == "ssh":
        return Ssh(user=user, host=host, port=port, path=parts.path)
    if name == "git":
        return GitTransport(host=host, port=port, path=parts.path)
    if name in ("http", "https"):
        return Http(secure=name == "https", host=host, port=port, path=parts.path)
    return Ftp(secure=name == "ftps", host=host, port=port, path=parts.path)


def parse_shorthand(raw: str) -> Ssh:
    """Parse the scp-like ``[user@]host:[~account/]path`` form.

    Raises MalformedShorthand naming the segment that does not fit.
    """
    head, colon, rest = raw.partition(":")
    if not colon:
        raise MalformedShorthand("host", "missing ':' after host")
    if "/" in head:
        raise MalformedShorthand("host", "host may not contain '/'")

    user: Optional[str] = None
    host = head
    if "@" in head:
        user, _, host = head.partition("@")
        if not user:
            raise MalformedShorthand("user", "empty user before '@'")
        if "@" in host:
            raise MalformedShorthand("host", "host may not contain '@'")
    if not host:
        raise MalformedShorthand("host", "empty host")

    if "/" not in rest:
        raise MalformedShorthand("path", "missing '/' in path")

    account: Optional[str] = None
    path = rest
    if rest.startswith("~"):
        account, _, path = rest[1:].partition("/")
        if not account:
            raise MalformedShorthand("account", "empty account after '~'")
    if not path:
        raise MalformedShorthand("path", "empty path")

    return Ssh(user=user, host=host, account=account, path=path)


def parse(raw: str) -> RemoteLocator:
    """Parse a raw clone address into a RemoteLocator.

    Only a scheme-qualified address with broken structure fails; anything
    that is neither a URL nor the shorthand is taken as a local path.
    """
    scheme = _split_scheme(raw)
    if scheme is not None:
        return _parse_scheme(raw, scheme)

    try:
        return parse_shorthand(raw)
    except MalformedShorthand:
        pass

    path = raw.replace(os.altsep, os.sep) if os.altsep else raw
    return File(path=path)
