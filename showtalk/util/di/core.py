"""Configuration providers (non-mockable)."""

from dishka import Scope, provide

from showtalk.config import AuthSettings, CommentSettings, Settings
from showtalk.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings for the whole process.

    Settings are read once from the environment and .env file; the nested
    sections are exposed separately so services depend only on what they use.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Token verification settings for JWTService."""
        return settings.auth

    @provide
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Page size, depth and ranking settings for comment threads."""
        return settings.comments
