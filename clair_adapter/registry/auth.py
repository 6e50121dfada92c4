"""Authorizers for registry requests."""

from collections.abc import Generator

import httpx


class BearerTokenAuthorizer(httpx.Auth):
    """Adds `Authorization: Bearer <token>` to every registry request."""

    def __init__(self, token: str):
        self._token = token

    def __repr__(self) -> str:
        return "BearerTokenAuthorizer(token=***)"

    @property
    def header_value(self) -> str:
        return f"Bearer {self._token}"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if self._token:
            request.headers["Authorization"] = self.header_value
        yield request
