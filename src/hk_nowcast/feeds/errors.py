"""Feed failure taxonomy and user-facing error messages."""

from __future__ import annotations

from enum import Enum


class FeedError(Exception):
    """Base class for feed failures surfaced to the caller."""


class NetworkUnavailableError(FeedError):
    """The feed host could not be reached (DNS, connect, timeout)."""


class FeedFetchError(FeedError):
    """The host answered, but not with a payload (HTTP error, missing mock)."""


class FeedDecodeError(FeedError):
    """A payload arrived but could not be turned into a dataset."""


class ErrorMessage(Enum):
    """Banner text shown by the app for the latest refresh."""

    NONE = ""
    NETWORK = "Failed to connect to the internet"
    DATA = "Failed to fetch weather data"

    @classmethod
    def for_exception(cls, exc: BaseException) -> ErrorMessage:
        if isinstance(exc, NetworkUnavailableError):
            return cls.NETWORK
        return cls.DATA
