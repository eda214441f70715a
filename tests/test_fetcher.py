import pytest
from conftest import make_http_error, make_thread

from yt_comment_fetcher.errors import ProviderError
from yt_comment_fetcher.fetcher import CommentFetcher


def page(ids, next_page_token=None, replies=None):
    replies = replies or {}
    response = {"items": [make_thread(i, replies=replies.get(i, ())) for i in ids]}
    if next_page_token:
        response["nextPageToken"] = next_page_token
    return response


def make_fetcher(youtube, **kwargs):
    return CommentFetcher("test-key", youtube=youtube, **kwargs)


class TestFetchPagination:
    def test_walks_cursor_until_exhausted(self, fake_youtube):
        youtube = fake_youtube([page(["A", "B"], "t2"), page(["C"])])

        batches = list(make_fetcher(youtube).fetch("vid123"))

        assert [[r["commentId"] for r in b] for b in batches] == [["A", "B"], ["C"]]
        assert [call["pageToken"] for call in youtube.calls] == ["", "t2"]

    def test_request_parameters(self, fake_youtube):
        youtube = fake_youtube([page(["A"])])

        list(make_fetcher(youtube, order="relevance").fetch("vid123"))

        assert youtube.calls == [{
            "part": "snippet,replies",
            "videoId": "vid123",
            "maxResults": 100,
            "order": "relevance",
            "pageToken": "",
        }]

    def test_batch_flattens_replies_in_document_order(self, fake_youtube):
        youtube = fake_youtube([page(["A", "B"], replies={"A": [("a1", {}), ("a2", {})]})])

        (batch,) = list(make_fetcher(youtube).fetch("vid123"))

        assert [r["commentId"] for r in batch] == ["A", "a1", "a2", "B"]
        assert [r["isTopLevel"] for r in batch] == [True, False, False, True]

    def test_missing_items_ends_quietly(self, fake_youtube):
        youtube = fake_youtube([page(["A"], "t2"), {"nextPageToken": "t3"}])

        batches = list(make_fetcher(youtube).fetch("vid123"))

        assert len(batches) == 1
        assert len(youtube.calls) == 2

    def test_empty_items_page_keeps_paginating(self, fake_youtube):
        youtube = fake_youtube([{"items": [], "nextPageToken": "t2"}, page(["B"])])

        batches = list(make_fetcher(youtube).fetch("vid123"))

        assert [[r["commentId"] for r in b] for b in batches] == [[], ["B"]]
        assert [call["pageToken"] for call in youtube.calls] == ["", "t2"]


class TestResultCap:
    def test_request_size_is_clamped_to_remaining_budget(self, fake_youtube):
        youtube = fake_youtube([page(["A", "B"], "t2"), page(["C"], "t3")])

        batches = list(make_fetcher(youtube, max_request_results=2, max_results=3).fetch("vid123"))

        assert [call["maxResults"] for call in youtube.calls] == [2, 1]
        assert sum(len(b) for b in batches) == 3

    def test_replies_do_not_count_against_cap(self, fake_youtube):
        youtube = fake_youtube([
            page(["A", "B"], "t2", replies={"A": [("a1", {}), ("a2", {})]}),
            page(["C", "D"], "t3"),
        ])

        batches = list(make_fetcher(youtube, max_request_results=2, max_results=4).fetch("vid123"))

        records = [r for b in batches for r in b]
        assert sum(1 for r in records if r["isTopLevel"]) == 4
        assert len(records) == 6
        assert len(youtube.calls) == 2

    @pytest.mark.parametrize("total,cap,page_size", [(10, 7, 3), (5, 20, 2), (6, 6, 6), (4, 1, 100)])
    def test_top_level_count_never_exceeds_cap(self, total, cap, page_size):
        ids = [f"c{i}" for i in range(total)]

        class Provider:
            """Serves ids honoring maxResults, like the real endpoint."""

            def __init__(self):
                self.calls = []

            def commentThreads(self):
                return self

            def list(self, **params):
                self.calls.append(params)
                start = int(params["pageToken"] or 0)
                end = start + params["maxResults"]
                response = page(ids[start:end], str(end) if end < total else None)
                return type("Req", (), {"execute": lambda _self: response})()

        batches = list(make_fetcher(Provider(), max_request_results=page_size, max_results=cap).fetch("v"))

        assert sum(len(b) for b in batches) == min(cap, total)

    def test_zero_cap_issues_no_request(self, fake_youtube):
        youtube = fake_youtube([])

        assert list(make_fetcher(youtube, max_results=0).fetch("vid123")) == []
        assert youtube.calls == []


class TestCancellation:
    def test_cancel_after_first_batch_stops_requests(self, fake_youtube):
        youtube = fake_youtube([page(["A"], "t2"), page(["B"])])
        pages = make_fetcher(youtube).fetch("vid123")

        first = next(pages)
        with pytest.raises(StopIteration):
            pages.send(True)

        assert [r["commentId"] for r in first] == ["A"]
        assert len(youtube.calls) == 1

    def test_falsy_send_continues(self, fake_youtube):
        youtube = fake_youtube([page(["A"], "t2"), page(["B"])])
        pages = make_fetcher(youtube).fetch("vid123")

        next(pages)
        second = pages.send(False)

        assert [r["commentId"] for r in second] == ["B"]


class TestProviderErrors:
    def test_error_payload_in_body(self, fake_youtube):
        youtube = fake_youtube([{"error": {"message": "API key not valid.", "errors": [{"reason": "badRequest"}]}}])

        with pytest.raises(ProviderError) as excinfo:
            list(make_fetcher(youtube).fetch("vid123"))

        assert excinfo.value.message == "API key not valid."
        assert excinfo.value.reason == "badRequest"

    def test_http_error_with_payload(self, fake_youtube):
        error = make_http_error(403, {"error": {
            "code": 403,
            "message": "The video identified by the videoId parameter has disabled comments.",
            "errors": [{"reason": "commentsDisabled"}],
        }})
        youtube = fake_youtube([error])

        with pytest.raises(ProviderError) as excinfo:
            list(make_fetcher(youtube).fetch("vid123"))

        assert excinfo.value.reason == "commentsDisabled"
        assert excinfo.value.status == 403
        assert "disabled comments" in str(excinfo.value)

    def test_error_details_that_are_not_objects(self, fake_youtube):
        youtube = fake_youtube([make_http_error(400, {"error": {"message": "bad", "errors": ["oops"]}})])

        with pytest.raises(ProviderError) as excinfo:
            list(make_fetcher(youtube).fetch("vid123"))

        assert excinfo.value.message == "bad"
        assert excinfo.value.reason is None
        assert excinfo.value.status == 400

    def test_earlier_batches_survive_a_later_error(self, fake_youtube):
        youtube = fake_youtube([page(["A"], "t2"), make_http_error(403, {"error": {"message": "quota"}})])
        received = []

        with pytest.raises(ProviderError):
            for batch in make_fetcher(youtube).fetch("vid123"):
                received.extend(batch)

        assert [r["commentId"] for r in received] == ["A"]

    def test_http_error_without_payload_propagates(self, fake_youtube):
        from googleapiclient.errors import HttpError

        youtube = fake_youtube([make_http_error(502, b"<html>Bad Gateway</html>")])

        with pytest.raises(HttpError):
            list(make_fetcher(youtube).fetch("vid123"))


def test_api_key_required():
    with pytest.raises(ValueError):
        CommentFetcher("")
