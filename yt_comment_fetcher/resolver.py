"""
Video ID resolution.

Turns whatever the user typed (a watch URL or a bare video ID) into the video ID
expected by the commentThreads endpoint.
"""

from urllib.parse import parse_qs, urlparse

from .config import YOUTUBE_ORIGIN
from .errors import MissingVideoParam, UnsupportedOrigin

_DEFAULT_PORTS = {'http': 80, 'https': 443}


def _origin(parsed_url, port):
    scheme = parsed_url.scheme.lower()
    host = (parsed_url.hostname or '').lower()
    if port is None or port == _DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def parse_video_id(value):
    """
    Extract the video ID from a YouTube watch URL, or pass a bare ID through.

    Anything that is not an absolute URL is treated as a literal video ID and
    returned unchanged; its shape is not validated.

    Parameters:
        value (str): A URL such as https://www.youtube.com/watch?v=dQw4w9WgXcQ, or an ID

    Returns:
        str: The video ID

    Raises:
        UnsupportedOrigin: If the URL is not on https://www.youtube.com
        MissingVideoParam: If the URL has no `v` query parameter

    Example:
        >>> parse_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        "dQw4w9WgXcQ"
    """
    parsed_url = urlparse(value)

    # No scheme means this is not an absolute URL: treat it as an ID
    if not parsed_url.scheme:
        return value

    # A URL with an unparseable port is not a valid URL either
    try:
        port = parsed_url.port
    except ValueError:
        return value

    if _origin(parsed_url, port) != YOUTUBE_ORIGIN:
        raise UnsupportedOrigin(f"Unsupported origin for the provided video URL: {value}")

    query = parse_qs(parsed_url.query, keep_blank_values=True)
    if 'v' not in query:
        raise MissingVideoParam(f"Missing required param 'v' for the provided video URL: {value}")

    return query['v'][0]


def create_video_link(video_id):
    """
    Create a standardized YouTube video URL from a video ID.

    Example:
        >>> create_video_link("dQw4w9WgXcQ")
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    """
    return f"{YOUTUBE_ORIGIN}/watch?v={video_id}"


def create_comment_link(video_id, comment_id):
    """Permalink that opens the video with the given comment highlighted."""
    return f"{create_video_link(video_id)}&lc={comment_id}"
