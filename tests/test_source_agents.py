from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import requests

from agents.crossref_agent import crossref_agent
from agents.data_acquisition_agent import DataAcquisitionAgent
from agents.deduplication_agent import DeduplicationAgent
from agents.institution_cache import InstitutionCache
from agents.openalex_agent import OpenAlexAgent
from agents.semantic_scholar_agent import semantic_scholar_agent
from clients.http_client import get_json
from utils.errors import SourceFetchError

WORK = {
    "id": "https://openalex.org/W1",
    "title": "Institution Paper",
    "authorships": [{"author": {"display_name": "Jane Doe"}, "institutions": []}],
    "publication_year": 2024,
    "cited_by_count": 12,
}


# ------------------------------------------------------------
# HTTP helper
# ------------------------------------------------------------
def test_get_json_raises_on_http_error():
    resp = MagicMock(ok=False, status_code=503, text="Service Unavailable")
    with patch("clients.http_client.requests.get", return_value=resp):
        with pytest.raises(SourceFetchError) as exc:
            get_json("openalex", "https://api.openalex.org/works")
    assert "HTTP 503" in str(exc.value)
    assert exc.value.source == "openalex"


def test_get_json_raises_on_transport_error():
    with patch("clients.http_client.requests.get", side_effect=requests.exceptions.ConnectionError("boom")):
        with pytest.raises(SourceFetchError):
            get_json("crossref", "https://api.crossref.org/works")


def test_get_json_raises_on_invalid_json():
    resp = MagicMock(ok=True, url="https://x")
    resp.json.side_effect = ValueError("no json")
    with patch("clients.http_client.requests.get", return_value=resp):
        with pytest.raises(SourceFetchError):
            get_json("crossref", "https://api.crossref.org/works")


# ------------------------------------------------------------
# OpenAlex
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_openalex_institution_strategy_wins(config):
    agent = OpenAlexAgent(cache=InstitutionCache())
    with patch("clients.openalex_client.lookup_institution_id", return_value="I1") as lookup, \
         patch("clients.openalex_client.search_institution_works", return_value=[WORK]) as by_inst, \
         patch("clients.openalex_client.search_works_text") as by_text:
        papers = await agent.search_university("Stanford University", 5, config)
        await agent.search_university("Stanford University", 5, config)

    assert [p.title for p in papers] == ["Institution Paper"]
    assert papers[0].authors[0].institutions == ["Stanford University"]
    by_text.assert_not_called()
    lookup.assert_called_once()
    assert by_inst.call_args.args[0] == "I1"


@pytest.mark.asyncio
async def test_openalex_falls_back_to_text_search(config):
    agent = OpenAlexAgent(cache=InstitutionCache())
    text_work = {**WORK, "title": "Text Paper"}
    with patch("clients.openalex_client.lookup_institution_id", return_value=None), \
         patch("clients.openalex_client.search_institution_works") as by_inst, \
         patch("clients.openalex_client.search_works_text", return_value=[text_work]):
        papers = await agent.search_university("Tiny College", 5, config)

    by_inst.assert_not_called()
    assert [p.title for p in papers] == ["Text Paper"]


@pytest.mark.asyncio
async def test_openalex_failures_degrade_to_empty(config):
    agent = OpenAlexAgent(cache=InstitutionCache())
    err = SourceFetchError("openalex", "HTTP 500")
    with patch("clients.openalex_client.lookup_institution_id", side_effect=err), \
         patch("clients.openalex_client.search_works_text", side_effect=err):
        assert await agent.search_university("MIT", 5, config) == []


# ------------------------------------------------------------
# Semantic Scholar / CrossRef
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_semantic_scholar_skips_without_api_key(monkeypatch, config):
    monkeypatch.delenv("SEMANTIC_SCHOLAR_API_KEY", raising=False)
    with patch("clients.semantic_scholar_client.search_papers") as search:
        assert await semantic_scholar_agent.search_university("MIT", 5, config) == []
    search.assert_not_called()


@pytest.mark.asyncio
async def test_semantic_scholar_university_search(monkeypatch, config):
    monkeypatch.setenv("SEMANTIC_SCHOLAR_API_KEY", "secret")
    paper = {"paperId": "p1", "title": "S2 Paper", "authors": [{"name": "Ann Lee"}], "year": 2025, "citationCount": 3}
    with patch("clients.semantic_scholar_client.search_papers", return_value=[paper]) as search:
        papers = await semantic_scholar_agent.search_university("MIT", 5, config)

    assert papers[0].title == "S2 Paper"
    assert papers[0].authors[0].institutions == ["MIT"]
    assert "secret" in search.call_args.args


@pytest.mark.asyncio
async def test_semantic_scholar_author_search_handles_unknown_author(monkeypatch, config):
    monkeypatch.delenv("SEMANTIC_SCHOLAR_API_KEY", raising=False)
    with patch("clients.semantic_scholar_client.search_author", return_value=None), \
         patch("clients.semantic_scholar_client.get_author_papers") as papers:
        assert await semantic_scholar_agent.search_author("Nobody", config) == []
    papers.assert_not_called()


@pytest.mark.asyncio
async def test_crossref_failure_degrades_to_empty(config):
    with patch("clients.crossref_client.search_author_works", side_effect=SourceFetchError("crossref", "HTTP 429")):
        assert await crossref_agent.search_author("Jane Doe", config) == []


# ------------------------------------------------------------
# Acquisition
# ------------------------------------------------------------
def _fetcher(**methods):
    fetcher = MagicMock()
    for name, value in methods.items():
        setattr(fetcher, name, AsyncMock(**value))
    return fetcher


@pytest.mark.asyncio
async def test_author_search_isolates_failing_sources(config, make_pub):
    acquisition = DataAcquisitionAgent(
        openalex=_fetcher(search_author={"return_value": [make_pub(title="A", doi="10.1/a")]}),
        semantic_scholar=_fetcher(search_author={"side_effect": RuntimeError("crash")}),
        crossref=_fetcher(search_author={"return_value": [make_pub(title="A again", doi="10.1/a"), make_pub(title="B")]}),
        deduplicator=DeduplicationAgent(),
    )

    papers = await acquisition.search_author("Jane Doe", config)

    assert [p.title for p in papers] == ["A", "B"]


@pytest.mark.asyncio
async def test_university_search_combines_sources_in_order(config, make_pub):
    acquisition = DataAcquisitionAgent(
        openalex=_fetcher(search_university={"return_value": [make_pub(title="One")]}),
        semantic_scholar=_fetcher(search_university={"return_value": [make_pub(title="one!"), make_pub(title="Two")]}),
        crossref=MagicMock(),
        deduplicator=DeduplicationAgent(),
    )

    papers = await acquisition.search_university("MIT", 5, config)

    assert [p.title for p in papers] == ["One", "Two"]


@pytest.mark.asyncio
async def test_scrape_author_publications_shape(config, make_pub):
    from services.scrape_service import scrape_author_publications

    acquisition = DataAcquisitionAgent(
        openalex=_fetcher(search_author={"return_value": [make_pub(title="Deep learning in Python", doi="10.1/a")]}),
        semantic_scholar=_fetcher(search_author={"return_value": []}),
        crossref=_fetcher(search_author={"return_value": []}),
        deduplicator=DeduplicationAgent(),
    )

    result = await scrape_author_publications("Jane Doe", config=config, acquisition=acquisition)

    assert result["totalFound"] == 1
    assert result["publications"][0]["doi"] == "10.1/a"
    assert result["publications"][0]["source"] == "OpenAlex"
    assert {"Deep Learning", "Python"} <= set(result["extractedSkills"])


# ------------------------------------------------------------
# Malformed provider payloads
# ------------------------------------------------------------
def test_get_json_sends_user_agent():
    resp = MagicMock(ok=True)
    resp.json.return_value = {"results": []}
    with patch("clients.http_client.requests.get", return_value=resp) as http_get:
        get_json("openalex", "https://api.openalex.org/works", headers={"x-api-key": "k"})

    headers = http_get.call_args.kwargs["headers"]
    assert headers["User-Agent"].startswith("PhD-Recruiting-DB")
    assert headers["x-api-key"] == "k"


@pytest.mark.asyncio
async def test_openalex_keeps_good_works_when_one_is_malformed(config):
    agent = OpenAlexAgent(cache=InstitutionCache())
    bad = {"title": "Bad Shape", "authorships": [{"author": "x"}], "primary_location": "oops"}
    with patch("clients.openalex_client.lookup_institution_id", return_value="I1"), \
         patch("clients.openalex_client.search_institution_works", return_value=[WORK, bad, "junk"]):
        papers = await agent.search_university("Stanford University", 5, config)

    assert [p.title for p in papers] == ["Institution Paper", "Bad Shape"]


@pytest.mark.asyncio
async def test_semantic_scholar_handles_non_object_external_ids(monkeypatch, config):
    monkeypatch.setenv("SEMANTIC_SCHOLAR_API_KEY", "secret")
    paper = {"paperId": "p1", "title": "S2 Paper", "authors": [{"name": "Ann Lee"}], "externalIds": "x"}
    with patch("clients.semantic_scholar_client.search_papers", return_value=[paper]):
        papers = await semantic_scholar_agent.search_university("MIT", 5, config)

    assert [p.title for p in papers] == ["S2 Paper"]
    assert papers[0].doi is None


def test_institution_lookup_ignores_non_object_result():
    from clients import openalex_client

    with patch("clients.openalex_client.get_json", return_value={"results": ["I1"]}):
        assert openalex_client.lookup_institution_id("MIT") is None
    with patch("clients.openalex_client.get_json", return_value={"results": [{"id": 42}]}):
        assert openalex_client.lookup_institution_id("MIT") is None


@pytest.mark.asyncio
async def test_semantic_scholar_author_search_with_non_object_match(config):
    with patch("clients.semantic_scholar_client.get_json", return_value={"data": ["x"]}), \
         patch("clients.semantic_scholar_client.get_author_papers") as papers:
        assert await semantic_scholar_agent.search_author("Jane Doe", config) == []
    papers.assert_not_called()
