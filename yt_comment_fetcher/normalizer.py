"""
Mapping from raw commentThreads items to flat comment records.

This is the only place that knows the shape of the YouTube comment payload.
Every record, top-level or reply, is a plain dict with the keys in COMMENT_FIELDS.
"""

import logging

logger = logging.getLogger(__name__)

COMMENT_FIELDS = (
    'videoId',
    'isTopLevel',
    'commentId',
    'commentDate',
    'commentUpdated',
    'commentAuthor',
    'commentAuthorChannel',
    'commentText',
    'commentHtml',
    'commentLiked',
)


def comment_from_snippet(comment_id, snippet, is_top_level):
    """
    Build one comment record from a comment resource's snippet.

    Top-level comments and replies share the same snippet fields, so both go
    through here.

    Parameters:
        comment_id (str): The comment ID assigned by YouTube
        snippet (dict): The comment's 'snippet' object
        is_top_level (bool): False for replies

    Returns:
        dict: A comment record
    """
    published_at = snippet.get('publishedAt')
    author_channel = snippet.get('authorChannelId') or {}

    return {
        "videoId": snippet.get('videoId'),
        "isTopLevel": is_top_level,
        "commentId": comment_id,
        "commentDate": published_at,
        # Never-edited comments report updatedAt == publishedAt
        "commentUpdated": snippet.get('updatedAt', published_at),
        "commentAuthor": snippet.get('authorDisplayName', ''),
        "commentAuthorChannel": author_channel.get('value', ''),
        "commentText": snippet.get('textOriginal', ''),
        "commentHtml": snippet.get('textDisplay', ''),
        "commentLiked": snippet.get('likeCount', 0),
    }


def flatten_thread(item):
    """
    Flatten one comment thread into records: the top-level comment, then its replies.

    Replies keep the order YouTube lists them in.

    Parameters:
        item (dict): One element of a commentThreads.list response's 'items'

    Returns:
        list: Comment records, top-level first
    """
    # Structure: item['snippet']['topLevelComment']['snippet']
    top_level_snippet = item['snippet']['topLevelComment']['snippet']
    records = [comment_from_snippet(item['id'], top_level_snippet, True)]

    replies = (item.get('replies') or {}).get('comments') or []
    for reply in replies:
        records.append(comment_from_snippet(reply['id'], reply['snippet'], False))

    return records


def flatten_page(items):
    """Flatten every thread of a response page, preserving document order."""
    records = []
    for item in items:
        records.extend(flatten_thread(item))
    logger.debug("Flattened %d threads into %d records", len(items), len(records))
    return records
