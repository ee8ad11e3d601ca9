"""Tests for the search and pagination controller."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from aptsearch.api.models import SearchResponse, SearchResult
from aptsearch.controller.search import GENERIC_ERROR_MESSAGE, SearchController
from aptsearch.controller.state import SearchPhase


@pytest.fixture
def view():
    return MagicMock()


@pytest.fixture
def controller(api_client, test_settings, view):
    return SearchController(api_client, settings=test_settings, view=view)


class TestInitialState:
    def test_empty(self, controller):
        assert controller.query == ""
        assert controller.page == 0
        assert controller.total_results == 0
        assert controller.results == []
        assert controller.error is None
        assert not controller.loading
        assert controller.phase is SearchPhase.IDLE


class TestSubmitSearch:
    """Tests for submit_search."""

    @pytest.mark.asyncio
    async def test_single_result_scenario(self, controller, backend):
        backend.search_replies = [
            {
                "results": [{"title": "Cats", "url": "http://a", "snippet": "...", "score": 0.9}],
                "totalCount": 1,
            }
        ]

        issued = await controller.submit_search("cat")

        assert issued
        assert controller.page == 0
        assert controller.results == [SearchResult(title="Cats", url="http://a", snippet="...", score=0.9)]
        assert controller.start == 1
        assert controller.end == 1
        assert controller.search_time is not None
        assert not controller.loading
        assert backend.search_calls == [{"query": "cat", "page": "0", "size": "10"}]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    async def test_blank_query_is_noop(self, controller, backend, query):
        issued = await controller.submit_search(query)

        assert not issued
        assert backend.search_calls == []
        assert controller.error is None
        assert controller.phase is SearchPhase.IDLE

    @pytest.mark.asyncio
    async def test_replaces_results_without_merging(self, controller, backend, page_factory):
        backend.search_replies = [page_factory(25, prefix="Cat"), page_factory(3, prefix="Dog")]

        await controller.submit_search("cat")
        await controller.submit_search("dog")

        assert [r.title for r in controller.results] == ["Dog 1", "Dog 2", "Dog 3"]
        assert controller.total_results == 3

    @pytest.mark.asyncio
    async def test_resets_page_and_clears_error(self, controller, backend, page_factory):
        backend.search_replies = [
            page_factory(25),
            page_factory(25, page=1),
            500,
            page_factory(4),
        ]

        await controller.submit_search("cat")
        await controller.change_page(1)
        assert controller.page == 1

        await controller.change_page(1)
        assert controller.error == GENERIC_ERROR_MESSAGE

        await controller.submit_search("cats")

        assert controller.page == 0
        assert controller.error is None
        assert backend.search_calls[-1] == {"query": "cats", "page": "0", "size": "10"}
        assert controller.total_results == 4

    @pytest.mark.asyncio
    async def test_page_reset_happens_before_request(self, controller, backend, page_factory):
        backend.search_replies = [page_factory(25), page_factory(25, page=1), (0.1, page_factory(2))]
        await controller.submit_search("cat")
        await controller.change_page(1)

        task = asyncio.create_task(controller.submit_search("dog"))
        await asyncio.sleep(0.03)

        assert controller.loading
        assert controller.page == 0
        assert controller.error is None
        await task

    @pytest.mark.asyncio
    async def test_network_failure_keeps_previous_results(self, controller, backend, page_factory):
        backend.search_replies = [page_factory(12), httpx.ConnectError("refused")]
        await controller.submit_search("cat")
        before = list(controller.results)

        await controller.submit_search("dog")

        assert controller.error == GENERIC_ERROR_MESSAGE
        assert not controller.loading
        assert controller.results == before
        assert controller.total_results == 12
        assert controller.phase is SearchPhase.ERROR

    @pytest.mark.asyncio
    async def test_missing_fields_default(self, controller, backend):
        backend.search_replies = [{}]

        await controller.submit_search("cat")

        assert controller.results == []
        assert controller.total_results == 0
        assert controller.error is None

    @pytest.mark.asyncio
    async def test_closes_suggestion_panel(self, api_client, test_settings):
        close = MagicMock()
        controller = SearchController(api_client, settings=test_settings, close_suggestions=close)

        await controller.submit_search("cat")

        close.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_rejected_while_loading(self, controller, backend, page_factory):
        backend.search_replies = [(0.1, page_factory(5))]

        first = asyncio.create_task(controller.submit_search("cat"))
        await asyncio.sleep(0.02)
        second = await controller.submit_search("dog")
        await first

        assert not second
        assert len(backend.search_calls) == 1

    @pytest.mark.asyncio
    async def test_suggestion_selection_matches_typed_search(
        self, api_client, test_settings, backend, page_factory
    ):
        backend.search_replies = [page_factory(15, prefix="Near")]
        typed = SearchController(api_client, settings=test_settings)
        picked = SearchController(api_client, settings=test_settings)

        await typed.submit_search("cats near me")
        await picked.select_suggestion("cats near me")

        assert backend.search_calls[0] == backend.search_calls[1]
        assert typed.results == picked.results
        assert (typed.page, typed.total_results) == (picked.page, picked.total_results)


class TestChangePage:
    """Tests for change_page."""

    @pytest.mark.asyncio
    async def test_previous_on_first_page_is_noop(self, controller, backend, page_factory):
        backend.search_replies = [page_factory(25)]
        await controller.submit_search("cat")

        assert not await controller.change_page(-1)
        assert len(backend.search_calls) == 1

    @pytest.mark.asyncio
    async def test_paging_scenario(self, controller, backend, view, page_factory):
        backend.search_replies = [page_factory(25), page_factory(25, page=1), page_factory(25, page=2)]
        await controller.submit_search("cat")

        assert await controller.change_page(1)
        assert backend.search_calls[-1] == {"query": "cat", "page": "1", "size": "10"}
        assert controller.page == 1
        assert controller.can_go_forward

        assert await controller.change_page(1)
        assert controller.page == 2
        assert not controller.can_go_forward
        assert (controller.start, controller.end) == (21, 25)

        assert not await controller.change_page(1)
        assert len(backend.search_calls) == 3
        assert view.scroll_to_top.call_count == 2

    @pytest.mark.asyncio
    async def test_keeps_query(self, controller, backend, page_factory):
        backend.search_replies = [page_factory(25), page_factory(25, page=1)]
        await controller.submit_search("cat")

        await controller.change_page(1)

        assert controller.query == "cat"
        assert backend.search_calls[-1]["query"] == "cat"

    @pytest.mark.asyncio
    async def test_failure_does_not_advance(self, controller, backend, view, page_factory):
        backend.search_replies = [page_factory(25), 502]
        await controller.submit_search("cat")
        before = list(controller.results)

        await controller.change_page(1)

        assert controller.page == 0
        assert controller.results == before
        assert controller.error == GENERIC_ERROR_MESSAGE
        assert not controller.loading
        view.scroll_to_top.assert_not_called()

    @pytest.mark.asyncio
    async def test_refreshes_total(self, controller, backend, page_factory):
        backend.search_replies = [page_factory(25), page_factory(31, page=1)]
        await controller.submit_search("cat")

        await controller.change_page(1)

        assert controller.total_results == 31

    @pytest.mark.asyncio
    async def test_noop_without_results(self, controller, backend):
        assert not await controller.change_page(1)
        assert backend.search_calls == []

    @pytest.mark.asyncio
    async def test_controls_disabled_while_loading(self, controller, backend, page_factory):
        backend.search_replies = [page_factory(25), (0.1, page_factory(25, page=1))]
        await controller.submit_search("cat")

        task = asyncio.create_task(controller.next_page())
        await asyncio.sleep(0.02)

        assert controller.loading
        assert not controller.can_go_forward
        assert not controller.can_go_back
        assert not await controller.previous_page()
        await task


class TestStaleResponses:
    """A superseded response never overwrites newer state."""

    @pytest.mark.asyncio
    async def test_superseded_response_dropped(self, controller, backend, page_factory):
        backend.search_replies = [(0.1, page_factory(3, prefix="Old")), page_factory(2, prefix="New")]

        old = asyncio.create_task(controller.submit_search("old"))
        await asyncio.sleep(0.02)
        # Bypass the loading guard to simulate overlapping requests
        response = await controller._request("new", 0)
        controller.results = list(response.results)
        await old

        assert [r.title for r in controller.results] == ["New 1", "New 2"]
        assert controller.request_count == 2


class TestUnexpectedFailures:
    """No failure may leave the controller stuck in the loading phase."""

    @pytest.mark.asyncio
    async def test_invalid_url_reported_as_failure(self, controller, backend, page_factory):
        backend.search_replies = [httpx.InvalidURL("bad host"), page_factory(1)]

        assert await controller.submit_search("cat")
        assert not controller.loading
        assert controller.error == GENERIC_ERROR_MESSAGE

        assert await controller.submit_search("cat")
        assert controller.error is None
        assert controller.total_results == 1

    @pytest.mark.asyncio
    async def test_unexpected_exception_settles_phase(self, test_settings, page_factory):
        client = MagicMock()
        client.search = AsyncMock(side_effect=RuntimeError("boom"))
        controller = SearchController(client, settings=test_settings)

        with pytest.raises(RuntimeError):
            await controller.submit_search("cat")

        assert not controller.loading
        assert controller.phase is SearchPhase.ERROR

        client.search = AsyncMock(return_value=SearchResponse.model_validate(page_factory(2)))
        assert await controller.submit_search("cat")
        assert controller.total_results == 2

    @pytest.mark.asyncio
    async def test_cancelled_request_settles_phase(self, controller, backend):
        backend.search_replies = [(1.0, {"results": [], "totalCount": 0})]

        task = asyncio.create_task(controller.submit_search("cat"))
        await asyncio.sleep(0.05)
        assert controller.loading
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert not controller.loading
        assert controller.phase is SearchPhase.ERROR
