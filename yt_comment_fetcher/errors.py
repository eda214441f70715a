"""Exceptions raised by the comment fetcher, resolver and exporters."""


class YtCommentFetcherError(Exception):
    """Base class for every error this package raises on purpose."""


class UnsupportedOrigin(YtCommentFetcherError, ValueError):
    """A video URL points somewhere other than the YouTube web origin."""


class MissingVideoParam(YtCommentFetcherError, ValueError):
    """A YouTube URL has no `v` query parameter."""


class ProviderError(YtCommentFetcherError):
    """
    The comment listing endpoint answered with an error payload.

    Attributes:
        message (str): The provider's message, verbatim
        reason (str or None): First error reason (e.g. 'commentsDisabled', 'quotaExceeded')
        status (int or None): HTTP status of the failed request, when known
    """

    def __init__(self, message, reason=None, status=None):
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.status = status


class EmptyInput(YtCommentFetcherError, ValueError):
    """CSV export was asked to serialize zero records."""


class InvalidCharacter(YtCommentFetcherError, ValueError):
    """A CSV cell holds a separator or line terminator while quoting is disabled."""


class UnsupportedFormat(YtCommentFetcherError, ValueError):
    """Export format name is not one of csv, html or json."""
