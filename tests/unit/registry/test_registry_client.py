"""Tests for the blocking registry client and the background searcher."""

from __future__ import annotations

import json
import threading
import unittest

import httpx

from cratescout.errors import RegistryError
from cratescout.events import EventChannel, SearchResultEvent
from cratescout.registry.client import USER_AGENT, RegistryClient
from cratescout.registry.models import PackageRecord, SearchPage, SortOrder
from cratescout.registry.searcher import AsyncSearcher


def _client_with(handler) -> RegistryClient:
    return RegistryClient(base_url="https://registry.test/api/v1/", transport=httpx.MockTransport(handler))


class RegistryClientTests(unittest.TestCase):
    def test_search_sends_query_params_and_user_agent(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            body = {
                "crates": [{"name": "tokio", "max_stable_version": "1.37.0", "downloads": 9}],
                "meta": {"total": 120},
            }
            return httpx.Response(200, content=json.dumps(body).encode("utf-8"))

        with _client_with(handler) as client:
            page = client.search("async runtime", 2, 5, SortOrder.RECENT_DOWNLOADS)

        self.assertEqual(len(seen), 1)
        request = seen[0]
        self.assertEqual(request.url.path, "/api/v1/crates")
        self.assertEqual(request.url.params["q"], "async runtime")
        self.assertEqual(request.url.params["page"], "2")
        self.assertEqual(request.url.params["per_page"], "5")
        self.assertEqual(request.url.params["sort"], "recent-downloads")
        self.assertEqual(request.headers["user-agent"], USER_AGENT)
        self.assertEqual(page.total, 120)
        self.assertEqual(page.records, (PackageRecord(name="tokio", version="1.37.0", downloads=9),))

    def test_http_error_status_becomes_registry_error(self) -> None:
        with _client_with(lambda request: httpx.Response(503)) as client:
            with self.assertRaises(RegistryError) as ctx:
                client.search("serde", 1, 5, SortOrder.RELEVANCE)
        self.assertIn("HTTP 503", str(ctx.exception))

    def test_transport_failure_becomes_registry_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client_with(handler) as client:
            with self.assertRaises(RegistryError) as ctx:
                client.search("serde", 1, 5, SortOrder.RELEVANCE)
        self.assertIn("request failed", str(ctx.exception))

    def test_invalid_json_becomes_registry_error(self) -> None:
        with _client_with(lambda request: httpx.Response(200, content=b"<html>")) as client:
            with self.assertRaisesRegex(RegistryError, "not valid JSON"):
                client.search("serde", 1, 5, SortOrder.RELEVANCE)


class AsyncSearcherTests(unittest.TestCase):
    def _receive(self, channel: EventChannel) -> SearchResultEvent:
        event = channel.receive(timeout=2.0)
        self.assertIsInstance(event, SearchResultEvent)
        return event

    def test_posts_one_result_event_with_records(self) -> None:
        calls: list[tuple] = []
        records = (PackageRecord(name="rand", version="0.8.5"),)

        def search_page(query, page, per_page, sort):
            calls.append((query, page, per_page, sort))
            return SearchPage(records=records, total=7)

        channel = EventChannel()
        searcher = AsyncSearcher(search_page, channel)
        request_id = searcher.search("rand", 3, SortOrder.NEWLY_ADDED)

        event = self._receive(channel)
        self.assertEqual(event, SearchResultEvent(request_id=request_id, records=records, total=7))
        self.assertTrue(event.ok)
        self.assertEqual(calls, [("rand", 3, 5, SortOrder.NEWLY_ADDED)])
        self.assertIsNone(channel.receive(timeout=0.05))

    def test_registry_failure_is_reported_as_error_event(self) -> None:
        def search_page(query, page, per_page, sort):
            raise RegistryError("registry returned HTTP 500")

        channel = EventChannel()
        AsyncSearcher(search_page, channel).search("x", 1, SortOrder.RELEVANCE, request_id=4)

        event = self._receive(channel)
        self.assertEqual(event.request_id, 4)
        self.assertEqual(event.records, ())
        self.assertEqual(event.error, "registry returned HTTP 500")
        self.assertFalse(event.ok)

    def test_unexpected_failure_is_reported_as_error_event(self) -> None:
        def search_page(query, page, per_page, sort):
            raise KeyError("boom")

        channel = EventChannel()
        AsyncSearcher(search_page, channel).search("x", 1, SortOrder.RELEVANCE)

        event = self._receive(channel)
        self.assertIsNotNone(event.error)
        self.assertTrue(event.error.startswith("search failed"))

    def test_request_ids_increase_and_follow_explicit_ids(self) -> None:
        channel = EventChannel()
        searcher = AsyncSearcher(lambda *args: SearchPage(records=()), channel)

        first = searcher.search("a", 1, SortOrder.RELEVANCE)
        explicit = searcher.search("b", 1, SortOrder.RELEVANCE, request_id=10)
        after = searcher.search("c", 1, SortOrder.RELEVANCE)

        self.assertEqual((first, explicit, after), (1, 10, 11))
        received = {self._receive(channel).request_id for _ in range(3)}
        self.assertEqual(received, {1, 10, 11})

    def test_result_after_channel_close_is_dropped(self) -> None:
        release = threading.Event()
        finished = threading.Event()

        def search_page(query, page, per_page, sort):
            release.wait(2.0)
            return SearchPage(records=())

        channel = EventChannel()
        searcher = AsyncSearcher(search_page, channel)
        original_worker = searcher._worker

        def worker(*args) -> None:
            try:
                original_worker(*args)
            finally:
                finished.set()

        searcher._worker = worker
        searcher.search("late", 1, SortOrder.RELEVANCE)
        channel.close()
        release.set()

        self.assertTrue(finished.wait(2.0))
        self.assertIsNone(channel.receive(timeout=0.01))


if __name__ == "__main__":
    unittest.main()
