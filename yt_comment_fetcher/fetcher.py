"""
Paginated retrieval of a video's comment threads.

CommentFetcher.fetch() walks commentThreads.list page by page using the
nextPageToken cursor and yields one batch of flat comment records per page.
The consumer may cancel after any batch by sending a truthy value into the
generator:

    pages = fetcher.fetch(video_id)
    batch = next(pages)
    pages.send(True)   # stops without requesting another page (raises StopIteration)
"""

import json
import logging

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .config import CONFIG
from .errors import ProviderError
from .normalizer import flatten_page

logger = logging.getLogger(__name__)

# Both the top-level comment and the inline replies of every thread
COMMENT_THREAD_PARTS = "snippet,replies"


def build_youtube_service(api_key):
    """
    Initialize a YouTube Data API v3 service object.

    The API key becomes the client's developer key, which is sent as the `key`
    query parameter on every request.
    """
    return build(CONFIG['api_service_name'], CONFIG['api_version'], developerKey=api_key)


def parse_http_error_payload(http_error):
    """
    Extract the provider error object from an HttpError's body.

    Parameters:
        http_error (HttpError): The HttpError exception object

    Returns:
        dict or None: The body's 'error' object (with 'message' and usually 'errors'),
                      or None when the body is not a YouTube error payload
    """
    try:
        error_content = json.loads(http_error.content)
    except (TypeError, ValueError):
        return None
    if not isinstance(error_content, dict):
        return None
    error = error_content.get('error')
    if not isinstance(error, dict) or 'message' not in error:
        return None
    return error


def _provider_error(error, status=None):
    errors = error.get('errors') or [{}]
    first = errors[0] if isinstance(errors[0], dict) else {}
    return ProviderError(error.get('message', ''), reason=first.get('reason'), status=status)


class CommentFetcher:
    """
    Fetches all comment threads (with replies) of a video.

    Parameters:
        api_key (str): YouTube Data API v3 key
        order (str): 'time' (newest first) or 'relevance'
        max_request_results (int): Threads requested per page, at most 100
        max_results (int or None): Cap on top-level comments fetched; None means no cap
        youtube (Resource or None): A prebuilt service object; built from api_key when None
    """

    def __init__(self, api_key, order=CONFIG['order'],
                 max_request_results=CONFIG['max_results_comments'],
                 max_results=None, youtube=None):
        if not api_key:
            raise ValueError("A YouTube Data API key is required")
        self.api_key = api_key
        self.order = order
        self.max_request_results = max_request_results
        self.max_results = max_results
        self._youtube = youtube

    @property
    def youtube(self):
        if self._youtube is None:
            self._youtube = build_youtube_service(self.api_key)
        return self._youtube

    def _list_page(self, video_id, page_size, page_token):
        logger.debug("Requesting %d threads for %s (pageToken=%r)", page_size, video_id, page_token)
        try:
            response = self.youtube.commentThreads().list(
                part=COMMENT_THREAD_PARTS,
                videoId=video_id,
                maxResults=page_size,
                order=self.order,
                pageToken=page_token,
            ).execute()
        except HttpError as e:
            error = parse_http_error_payload(e)
            if error is None:
                # Not a provider payload: let the transport failure through as-is
                raise
            raise _provider_error(error, status=e.resp.status) from e

        if response.get('error'):
            raise _provider_error(response['error'])
        return response

    def fetch(self, video_id):
        """
        Yield one list of comment records per page of comment threads.

        The cap counts top-level comments only, so a batch can hold more records
        than were requested when threads carry replies. Sending a truthy value
        into the generator after a batch stops it before the next request.

        Parameters:
            video_id (str): The video to fetch comments from

        Yields:
            list: Comment records for one page, each thread followed by its replies

        Raises:
            ProviderError: If the API answers with an error payload
        """
        fetched = 0
        next_page_token = ''

        while self.max_results is None or fetched < self.max_results:
            page_size = self.max_request_results
            if self.max_results is not None:
                page_size = min(page_size, self.max_results - fetched)

            response = self._list_page(video_id, page_size, next_page_token)

            # No item collection at all ends the listing like an exhausted cursor
            items = response.get('items')
            if items is None:
                break

            cancelled = yield flatten_page(items)
            if cancelled:
                logger.debug("Fetch of %s cancelled after %d threads", video_id, fetched)
                return

            fetched += len(items)
            next_page_token = response.get('nextPageToken')
            if not next_page_token:
                break

        logger.debug("Fetched %d threads for %s", fetched, video_id)
