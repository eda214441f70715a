"""
Fetch every comment thread (with replies) of a YouTube video and export it as CSV, HTML or JSON.
"""

from .dates import format_local_date
from .errors import (
    EmptyInput,
    InvalidCharacter,
    MissingVideoParam,
    ProviderError,
    UnsupportedFormat,
    UnsupportedOrigin,
    YtCommentFetcherError,
)
from .exporters import CsvHandler, ExportedFile, dump, dump_csv, dump_html, dump_json
from .fetcher import CommentFetcher, build_youtube_service
from .normalizer import flatten_thread
from .resolver import create_video_link, parse_video_id

__all__ = [
    "CommentFetcher",
    "CsvHandler",
    "EmptyInput",
    "ExportedFile",
    "InvalidCharacter",
    "MissingVideoParam",
    "ProviderError",
    "UnsupportedFormat",
    "UnsupportedOrigin",
    "YtCommentFetcherError",
    "build_youtube_service",
    "create_video_link",
    "dump",
    "dump_csv",
    "dump_html",
    "dump_json",
    "flatten_thread",
    "format_local_date",
    "parse_video_id",
]
