"""Shared fixtures: an in-memory stand-in for the YouTube service object."""

import json

import httplib2
import pytest
from googleapiclient.errors import HttpError


def make_snippet(video_id="vid123", author="Alice", text="hello", html=None,
                 published="2024-01-15T03:00:00Z", updated=None, likes=0, channel="UCalice"):
    return {
        "videoId": video_id,
        "authorDisplayName": author,
        "authorChannelId": {"value": channel},
        "textOriginal": text,
        "textDisplay": html if html is not None else text,
        "publishedAt": published,
        "updatedAt": updated or published,
        "likeCount": likes,
    }


def make_thread(comment_id, replies=(), **snippet_kwargs):
    """A commentThreads item; replies is a sequence of (reply_id, snippet_kwargs)."""
    item = {
        "id": comment_id,
        "snippet": {
            "topLevelComment": {"id": comment_id, "snippet": make_snippet(**snippet_kwargs)},
            "totalReplyCount": len(replies),
        },
    }
    if replies:
        item["replies"] = {
            "comments": [
                {"id": reply_id, "snippet": make_snippet(**kwargs)}
                for reply_id, kwargs in replies
            ]
        }
    return item


def make_http_error(status, body):
    content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return HttpError(httplib2.Response({"status": status}), content)


class _Request:
    def __init__(self, result):
        self._result = result

    def execute(self):
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


class _CommentThreads:
    def __init__(self, service):
        self._service = service

    def list(self, **params):
        self._service.calls.append(params)
        if not self._service.responses:
            raise AssertionError("unexpected extra commentThreads.list request")
        return _Request(self._service.responses.pop(0))


class FakeYouTube:
    """Replays canned commentThreads.list responses and records every request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def commentThreads(self):
        return _CommentThreads(self)


@pytest.fixture
def fake_youtube():
    return FakeYouTube
