"""URL parsing for the derivation key ("used text").

Input is shaped like ``scheme://userinfo@host:port/path?query``. Any part
may be missing. The key is assembled as::

    [scheme://][userinfo@][subdomain.]domain[params]

where ``domain`` is the last two host labels and is always present, and the
port is never used.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from password_maker.profiles.base import Profile

_PARAMS_SEPARATORS = ("/", "?", "#")


class UrlMode(str, Enum):
    """How much of the URL may contribute to the key."""

    COMPONENTS = "components"
    ALL = "all"


@dataclass(frozen=True)
class UrlComponents:
    """The pieces of a parsed URL."""

    scheme: str = ""
    userinfo: str = ""
    hostname: str = ""
    port: str = ""
    subdomain: str = ""
    domain: str = ""
    params: str = ""

    @classmethod
    def parse(cls, text: str) -> "UrlComponents":
        """Split ``text`` into URL components. Never fails."""
        scheme, separator, rest = text.partition("://")
        if not separator:
            scheme, rest = "", text

        end = len(rest)
        for char in _PARAMS_SEPARATORS:
            position = rest.find(char)
            if position != -1:
                end = min(end, position)
        authority, params = rest[:end], rest[end:]

        userinfo, at, hostport = authority.rpartition("@")
        if not at:
            userinfo = ""

        hostname, _, port = hostport.partition(":")

        labels = hostname.split(".")
        if len(labels) <= 2:
            subdomain, domain = "", hostname
        else:
            subdomain = ".".join(labels[:-2])
            domain = ".".join(labels[-2:])

        return cls(
            scheme=scheme,
            userinfo=userinfo,
            hostname=hostname,
            port=port,
            subdomain=subdomain,
            domain=domain,
            params=params,
        )


@dataclass(frozen=True)
class UrlParsing:
    """Builds the derivation key from a URL according to inclusion flags.

    ``use_domain`` is accepted for settings compatibility; the domain is
    always part of the key.
    """

    use_protocol: bool = False
    use_userinfo: bool = False
    use_subdomain: bool = True
    use_domain: bool = True
    use_params: bool = False
    mode: UrlMode = UrlMode.COMPONENTS

    @classmethod
    def from_profile(cls, profile: "Profile") -> "UrlParsing":
        return cls(
            use_protocol=profile.use_protocol,
            use_userinfo=profile.use_userinfo,
            use_subdomain=profile.use_subdomain,
            use_domain=profile.use_domain,
            use_params=profile.use_params,
            mode=UrlMode(profile.url_mode),
        )

    @property
    def includes_params(self) -> bool:
        return self.mode is UrlMode.ALL and self.use_params

    def parse(self, text: str) -> str:
        """Return the derivation key for ``text``."""
        return self.assemble(UrlComponents.parse(text))

    def assemble(self, components: UrlComponents) -> str:
        parts: list[str] = []
        if self.use_protocol and components.scheme:
            parts.append(f"{components.scheme}://")
        if self.use_userinfo and components.userinfo:
            parts.append(f"{components.userinfo}@")
        if self.use_subdomain and components.subdomain:
            parts.append(f"{components.subdomain}.")
        parts.append(components.domain)
        if self.includes_params and components.params:
            parts.append(components.params)
        return "".join(parts)
