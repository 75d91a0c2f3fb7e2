"""GitHub API access: transport, client, credentials."""

from pinbump.github.auth import AuthError, parse_token, resolve_token
from pinbump.github.client import GitHubClient
from pinbump.github.http import HttpClient, HttpError, MockHttpClient, RealHttpClient

__all__ = [
    "AuthError",
    "GitHubClient",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "parse_token",
    "resolve_token",
]
