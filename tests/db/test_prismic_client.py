import httpx
import pytest
from respx import MockRouter

from app.db.prismic import PrismicClient, at
from app.exceptions import ContentBackendError, InvalidCursorError
from tests.conftest import API_ENDPOINT, MASTER_REF, SEARCH_URL

API_RESPONSE = {
    "refs": [
        {"id": "master", "ref": MASTER_REF, "label": "Master", "isMasterRef": True},
        {"id": "draft", "ref": "draft-ref", "label": "Draft"},
    ]
}

SEARCH_RESPONSE = {
    "page": 1,
    "results_per_page": 1,
    "total_results_size": 2,
    "total_pages": 2,
    "next_page": f"{SEARCH_URL}?page=2&pageSize=1",
    "prev_page": None,
    "results": [
        {
            "id": "id-hello",
            "uid": "hello",
            "type": "posts",
            "first_publication_date": "2021-03-15T19:25:28+0000",
            "last_publication_date": "2021-03-15T19:25:28+0000",
            "data": {"title": "Hello"},
            "tags": [],
        }
    ],
}


def test_at_predicate_quotes_value():
    assert at("document.type", "posts") == '[at(document.type, "posts")]'
    assert at("my.posts.uid", 'say "hi"') == '[at(my.posts.uid, "say \\"hi\\"")]'


@pytest.mark.asyncio
async def test_query_uses_master_ref_and_builds_params(respx_mock: MockRouter):
    search = respx_mock.get(url__startswith=SEARCH_URL).mock(
        return_value=httpx.Response(200, json=SEARCH_RESPONSE)
    )
    api = respx_mock.get(API_ENDPOINT).mock(
        return_value=httpx.Response(200, json=API_RESPONSE)
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        response = await client.query(
            [at("document.type", "posts")],
            fetch=["posts.title", "posts.author"],
            page_size=1,
            orderings="[document.last_publication_date desc]",
        )

    assert api.call_count == 1
    params = search.calls.last.request.url.params
    assert params["ref"] == MASTER_REF
    assert params["q"] == '[[at(document.type, "posts")]]'
    assert params["fetch"] == "posts.title,posts.author"
    assert params["pageSize"] == "1"
    assert params["orderings"] == "[document.last_publication_date desc]"
    assert "after" not in params
    assert response.next_page == SEARCH_RESPONSE["next_page"]
    assert response.results[0].uid == "hello"


@pytest.mark.asyncio
async def test_query_with_explicit_ref_skips_master_lookup(respx_mock: MockRouter):
    search = respx_mock.get(url__startswith=SEARCH_URL).mock(
        return_value=httpx.Response(200, json=SEARCH_RESPONSE)
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT, access_token="secret")
        await client.query([at("document.type", "posts")], ref="preview-ref", after="id-1")

    params = search.calls.last.request.url.params
    assert params["ref"] == "preview-ref"
    assert params["after"] == "id-1"
    assert params["access_token"] == "secret"


@pytest.mark.asyncio
async def test_master_ref_is_cached(respx_mock: MockRouter):
    respx_mock.get(url__startswith=SEARCH_URL).mock(
        return_value=httpx.Response(200, json=SEARCH_RESPONSE)
    )
    api = respx_mock.get(API_ENDPOINT).mock(
        return_value=httpx.Response(200, json=API_RESPONSE)
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        await client.query([at("document.type", "posts")])
        await client.query([at("document.type", "posts")])

    assert api.call_count == 1


@pytest.mark.asyncio
async def test_get_by_uid_returns_first_result(respx_mock: MockRouter):
    search = respx_mock.get(url__startswith=SEARCH_URL).mock(
        return_value=httpx.Response(200, json=SEARCH_RESPONSE)
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        doc = await client.get_by_uid("posts", "hello", ref="r")

    assert doc.uid == "hello"
    assert search.calls.last.request.url.params["q"] == '[[at(my.posts.uid, "hello")]]'


@pytest.mark.asyncio
async def test_get_by_uid_returns_none_when_missing(respx_mock: MockRouter):
    respx_mock.get(url__startswith=SEARCH_URL).mock(
        return_value=httpx.Response(200, json={**SEARCH_RESPONSE, "results": []})
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        assert await client.get_by_uid("posts", "missing", ref="r") is None
        assert await client.get_by_id("id-missing", ref="r") is None


@pytest.mark.asyncio
async def test_fetch_page_follows_cursor(respx_mock: MockRouter):
    cursor = SEARCH_RESPONSE["next_page"]
    route = respx_mock.get(url__startswith=SEARCH_URL).mock(
        return_value=httpx.Response(
            200, json={**SEARCH_RESPONSE, "page": 2, "next_page": None}
        )
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        response = await client.fetch_page(cursor)

    assert str(route.calls.last.request.url) == cursor
    assert response.page == 2
    assert response.next_page is None


@pytest.mark.asyncio
async def test_fetch_page_rejects_foreign_cursor():
    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        with pytest.raises(InvalidCursorError):
            await client.fetch_page("https://evil.example.com/documents/search?page=2")


@pytest.mark.asyncio
async def test_error_status_raises_backend_error(respx_mock: MockRouter):
    respx_mock.get(url__startswith=SEARCH_URL).mock(
        return_value=httpx.Response(500, json={"message": "boom"})
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        with pytest.raises(ContentBackendError) as exc:
            await client.query([at("document.type", "posts")], ref="r")

    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_connection_error_raises_backend_error(respx_mock: MockRouter):
    respx_mock.get(url__startswith=SEARCH_URL).mock(
        side_effect=httpx.ConnectTimeout("timeout")
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        with pytest.raises(ContentBackendError) as exc:
            await client.query([at("document.type", "posts")], ref="r")

    assert exc.value.status_code is None


@pytest.mark.asyncio
async def test_missing_master_ref_raises(respx_mock: MockRouter):
    respx_mock.get(API_ENDPOINT).mock(
        return_value=httpx.Response(200, json={"refs": []})
    )

    async with httpx.AsyncClient() as http:
        client = PrismicClient(http, API_ENDPOINT)
        with pytest.raises(ContentBackendError):
            await client.get_master_ref()
