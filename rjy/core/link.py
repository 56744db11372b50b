# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Parsing of Jupyter server links."""

from typing import NamedTuple
from urllib.parse import parse_qsl, urlsplit

from rjy.core.errors import InvalidLink

MIN_PORT = 1
MAX_PORT = 65535


class LinkDescriptor(NamedTuple):
    """Port and authentication token carried by a Jupyter link."""

    port: int
    token: str

    @classmethod
    def parse(cls, link: str) -> "LinkDescriptor":
        """Extract the port and token from a Jupyter link.

        Example:
            LinkDescriptor.parse("http://localhost:8888/?token=abc")
            -> LinkDescriptor(port=8888, token="abc")

        Raises:
            InvalidLink: If the link is not a URL, has no explicit port or
                carries no token query parameter.
        """
        try:
            parts = urlsplit(link.strip())
            port = parts.port
        except ValueError as e:
            raise InvalidLink(f"Failed to parse Jupyter URL '{link}': {e}")

        if not parts.scheme or not parts.hostname:
            raise InvalidLink(f"Failed to parse Jupyter URL '{link}'.")

        if port is None:
            raise InvalidLink("Incorrect Jupyter link format: no port in URL.")
        if not MIN_PORT <= port <= MAX_PORT:
            raise InvalidLink(f"Incorrect Jupyter link format: invalid port {port}.")

        # First token parameter wins
        for name, value in parse_qsl(parts.query, keep_blank_values=True):
            if name == "token":
                return cls(port=port, token=value)

        raise InvalidLink(
            "Incorrect Jupyter link format: cannot determine authentication token.",
            hint="Copy the full link printed by the Jupyter server, including '?token=...'.",
        )
