"""
tools/search.py — Web Search Tool

Simulated by default: the reply only says what would be searched.

With tools.web_search.live enabled, the message text is POSTed to
DuckDuckGo's HTML endpoint (no API key) and the result page is parsed
with BeautifulSoup into a short numbered list. Network failures come
back as reply text, like every other tool failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, NamedTuple, Optional
from urllib.parse import parse_qs, urlparse

import httpx
from bs4 import BeautifulSoup

from observability.logger import get_logger
from tools.types import Tool

if TYPE_CHECKING:
    from agent.session import Session

log = get_logger(__name__)

DDG_HTML_ENDPOINT = "https://html.duckduckgo.com/html/"
MAX_RESULTS_CAP = 10

# The HTML endpoint serves an empty page to clients without a browser UA
_BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "en-US,en;q=0.9",
}


class SearchHit(NamedTuple):
    title: str
    url: str
    snippet: str = ""


class WebSearchTool(Tool):
    name = "web_search"
    description = "Search the web for the message text"
    category = "search"

    def __init__(
        self,
        live: bool = False,
        max_results: int = 5,
        timeout: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.live = live
        self.max_results = max(1, min(max_results, MAX_RESULTS_CAP))
        self.timeout = timeout
        self._transport = transport

    def execute(self, text: str, session: "Session") -> str:
        if not self.live:
            return f"I would search the web for: {text}"

        query_preview = text[:120]
        log.debug("web_search.start", query=query_preview, max_results=self.max_results)
        try:
            hits = self._fetch_hits(text)
        except httpx.TimeoutException:
            log.warning("web_search.timeout", query=query_preview, timeout=self.timeout)
            return f"Search timed out for: {text}"
        except httpx.HTTPError as e:
            log.warning("web_search.http_error", query=query_preview, error=str(e))
            return f"Search failed: {e}"

        log.debug("web_search.complete", hits=len(hits))
        return format_results(text, hits)

    def _fetch_hits(self, query: str) -> list[SearchHit]:
        client = httpx.Client(
            headers=_BROWSER_HEADERS,
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )
        with client:
            response = client.post(DDG_HTML_ENDPOINT, data={"q": query, "b": "", "kl": "us-en"})
            response.raise_for_status()
        return parse_ddg_results(response.text, self.max_results)


def format_results(query: str, hits: list[SearchHit]) -> str:
    if not hits:
        return f"No results found for: {query}"
    out = [f"Top results for: {query}", ""]
    for n, hit in enumerate(hits, start=1):
        out += [f"{n}. {hit.title}", f"   {hit.url}"]
        if hit.snippet:
            out.append(f"   {hit.snippet}")
    return "\n".join(out)


def _iter_hits(html: str) -> Iterator[SearchHit]:
    page = BeautifulSoup(html, "html.parser")
    for block in page.select(".result"):
        anchor = block.select_one(".result__title a")
        if anchor is None:
            continue
        title = anchor.get_text(strip=True)
        url = _clean_ddg_url(anchor.get("href", ""))
        if not (title and url):
            continue
        snippet = block.select_one(".result__snippet")
        yield SearchHit(title, url, snippet.get_text(strip=True) if snippet else "")


def parse_ddg_results(html: str, max_results: int) -> list[SearchHit]:
    """First max_results linked hits from a DuckDuckGo HTML result page."""
    hits: list[SearchHit] = []
    for hit in _iter_hits(html):
        if len(hits) >= max_results:
            break
        hits.append(hit)
    return hits


def _clean_ddg_url(href: str) -> Optional[str]:
    """
    Resolve DuckDuckGo's redirect links (//duckduckgo.com/l/?uddg=<target>
    or the relative /l/?uddg=<target>) to the target URL. Non-http links
    give None.
    """
    if href.startswith("//"):
        href = "https:" + href
    elif href.startswith("/l/?"):
        href = "https://duckduckgo.com" + href

    parsed = urlparse(href)
    if parsed.netloc.endswith("duckduckgo.com") and parsed.path == "/l/":
        target = parse_qs(parsed.query).get("uddg")
        return target[0] if target else None
    if parsed.scheme in ("http", "https"):
        return href
    return None
