"""
SEO Signal Extraction

Independent extractors over a parsed HTMLDocument:
- Metadata (title, description, canonical, robots)
- Structured data (JSON-LD @type values, microdata presence)
- Open Graph tags
- Heading counts
- Link statistics and anchor details
- Image alt coverage
- Content intent and keyword usage

run_seo_checks() parses once and composes every extractor into an AuditResult.
"""

import json
import logging
import re
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any
from urllib.parse import urlparse

from seo_auditor.integrations.html_document import HTMLDocument, parse
from seo_auditor.services.suggestions import generate_suggestions

logger = logging.getLogger(__name__)

NO_VISIBLE_TEXT = "[No visible text]"
NO_SRC = "[No src]"
MISSING_ALT = "[Missing alt]"

KEYWORD_STUFFING_MAX_FREQUENCY = 30
KEYWORD_STUFFING_MAX_RATIO = 0.05

MICRODATA_PATTERN = re.compile(r"itemscope|itemtype|itemprop", re.IGNORECASE)


class Intent(str, Enum):
    TRANSACTIONAL = "Transactional"
    INFORMATIONAL = "Informational"
    NAVIGATIONAL = "Navigational"
    COMMERCIAL_INVESTIGATION = "Commercial Investigation"
    UNKNOWN = "Unknown"


# Checked in order, first match wins
INTENT_KEYWORDS: tuple[tuple[Intent, tuple[str, ...]], ...] = (
    (Intent.TRANSACTIONAL, ("buy", "purchase", "order", "discount", "coupon", "deal")),
    (Intent.INFORMATIONAL, ("how to", "what is", "guide", "tutorial", "tips", "learn")),
    (Intent.NAVIGATIONAL, ("login", "sign in", "homepage", "official site")),
    (Intent.COMMERCIAL_INVESTIGATION, ("best", "compare", "review", "top", "vs", "alternative")),
)


@dataclass(frozen=True)
class Metadata:
    title: str | None = None
    description: str | None = None
    canonical: str | None = None
    robots: str | None = None


@dataclass(frozen=True)
class StructuredData:
    types: list[str] = field(default_factory=list)
    has_microdata: bool = False


@dataclass(frozen=True)
class OpenGraph:
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None


@dataclass(frozen=True)
class Headings:
    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0
    h6: int = 0


@dataclass(frozen=True)
class LinkStats:
    total: int = 0
    internal: int = 0
    external: int = 0


@dataclass(frozen=True)
class Anchor:
    index: int
    href: str
    text: str
    type: str
    is_internal: bool


@dataclass(frozen=True)
class ImageDetail:
    index: int
    src: str
    alt: str
    missing: bool


@dataclass(frozen=True)
class ImageStats:
    total: int = 0
    missing_alt: int = 0
    details: list[ImageDetail] = field(default_factory=list)


@dataclass(frozen=True)
class KeywordUsage:
    keyword_frequency: int = 0
    keyword_stuffing: bool = False


@dataclass(frozen=True)
class AuditResult:
    metadata: Metadata
    structured_data: StructuredData
    open_graph: OpenGraph
    headings: Headings
    links: LinkStats
    anchors: list[Anchor]
    images: ImageStats
    word_count: int
    intent: Intent
    keyword: str | None
    keyword_frequency: int
    keyword_stuffing: bool
    suggestions: list[str]

    def to_dict(self) -> dict:
        data = asdict(self)
        data["intent"] = self.intent.value
        return data


def _first_attr(doc: HTMLDocument, selector: str, name: str) -> str | None:
    element = doc.select_one(selector)
    if element is None:
        return None
    return element.attr(name)


def check_metadata(doc: HTMLDocument) -> Metadata:
    """Extract title, meta description, canonical URL and robots directive."""
    title_tag = doc.select_one("title")
    robots = _first_attr(doc, 'meta[name="robots"]', "content")
    return Metadata(
        title=title_tag.text() if title_tag is not None else None,
        description=_first_attr(doc, 'meta[name="description"]', "content"),
        canonical=_first_attr(doc, 'link[rel="canonical"]', "href"),
        robots=robots.lower() if robots is not None else None,
    )


def _collect_types(value: Any, types: dict[str, None]):
    if isinstance(value, str):
        types.setdefault(value, None)
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, str):
                types.setdefault(item, None)


def check_structured_data(doc: HTMLDocument) -> StructuredData:
    """Collect JSON-LD @type values and detect microdata attributes."""
    # dict keeps first-seen order while deduplicating
    types: dict[str, None] = {}

    for script in doc.select('script[type="application/ld+json"]'):
        try:
            data = json.loads(script.html())
        except (json.JSONDecodeError, TypeError, ValueError):
            logger.debug("Skipping malformed JSON-LD block")
            continue

        items = data if isinstance(data, list) else [data]
        for item in items:
            if isinstance(item, dict) and item.get("@type"):
                _collect_types(item["@type"], types)

    return StructuredData(
        types=list(types),
        has_microdata=bool(MICRODATA_PATTERN.search(doc.source)),
    )


def check_open_graph(doc: HTMLDocument) -> OpenGraph:
    """Extract og:title, og:description and og:image."""
    return OpenGraph(
        og_title=_first_attr(doc, 'meta[property="og:title"]', "content"),
        og_description=_first_attr(doc, 'meta[property="og:description"]', "content"),
        og_image=_first_attr(doc, 'meta[property="og:image"]', "content"),
    )


def check_headings(doc: HTMLDocument) -> Headings:
    return Headings(
        h1=doc.count("h1"),
        h2=doc.count("h2"),
        h3=doc.count("h3"),
        h4=doc.count("h4"),
        h5=doc.count("h5"),
        h6=doc.count("h6"),
    )


def _page_hostname(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def is_internal_href(href: str, hostname: str) -> bool:
    """Root-relative hrefs, or hrefs mentioning the page hostname, are internal."""
    if href.startswith("/"):
        return True
    return bool(hostname) and hostname in href


def check_links(doc: HTMLDocument, url: str) -> LinkStats:
    """Count internal vs external anchors."""
    hostname = _page_hostname(url)
    anchors = doc.select("a")
    internal = sum(1 for a in anchors if is_internal_href(a.attr("href") or "", hostname))
    return LinkStats(
        total=len(anchors),
        internal=internal,
        external=len(anchors) - internal,
    )


def extract_anchors(doc: HTMLDocument, url: str) -> list[Anchor]:
    """Per-anchor href, visible text, follow type and internal flag."""
    hostname = _page_hostname(url)
    anchors = []
    for index, a in enumerate(doc.select("a"), start=1):
        href = a.attr("href") or ""
        rel_tokens = (a.attr("rel") or "").lower().split()
        anchors.append(Anchor(
            index=index,
            href=href,
            text=a.text().strip() or NO_VISIBLE_TEXT,
            type="nofollow" if "nofollow" in rel_tokens else "dofollow",
            is_internal=is_internal_href(href, hostname),
        ))
    return anchors


def check_images(doc: HTMLDocument) -> ImageStats:
    """Image alt coverage. An explicitly empty alt is not counted as missing."""
    details = []
    for index, img in enumerate(doc.select("img"), start=1):
        src = img.attr("src")
        alt = img.attr("alt")
        details.append(ImageDetail(
            index=index,
            src=src if src is not None else NO_SRC,
            alt=alt if alt is not None else MISSING_ALT,
            missing=alt is None,
        ))
    return ImageStats(
        total=len(details),
        missing_alt=sum(1 for d in details if d.missing),
        details=details,
    )


def detect_intent(text: str) -> Intent:
    lower = (text or "").lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return intent
    return Intent.UNKNOWN


def check_keyword_usage(text: str, keyword: str | None) -> KeywordUsage:
    """Whole-word keyword frequency and stuffing detection.

    Stuffing is flagged when the keyword appears more than 30 times or makes up
    more than 5% of all words.
    """
    normalized_keyword = (keyword or "").strip().lower()
    if not normalized_keyword:
        return KeywordUsage(keyword_frequency=0, keyword_stuffing=False)

    pattern = r"\s+".join(re.escape(part) for part in normalized_keyword.split())
    regex = re.compile(rf"\b{pattern}\b", re.IGNORECASE)
    frequency = len(regex.findall(text or ""))

    words = (text or "").split()
    usage_ratio = frequency / len(words) if words else 0.0

    return KeywordUsage(
        keyword_frequency=frequency,
        keyword_stuffing=frequency > KEYWORD_STUFFING_MAX_FREQUENCY or usage_ratio > KEYWORD_STUFFING_MAX_RATIO,
    )


def run_seo_checks(html: str, url: str, keyword: str | None = None) -> AuditResult:
    """Run every extractor over one document and assemble the audit result."""
    doc = parse(html)

    metadata = check_metadata(doc)
    structured_data = check_structured_data(doc)
    open_graph = check_open_graph(doc)
    headings = check_headings(doc)
    links = check_links(doc, url)
    anchors = extract_anchors(doc, url)
    images = check_images(doc)

    body_text = doc.visible_text("body")
    word_count = len(body_text.split())
    intent = detect_intent(body_text)
    usage = check_keyword_usage(body_text, keyword)

    suggestions = generate_suggestions(
        keyword=keyword,
        keyword_frequency=usage.keyword_frequency,
        keyword_stuffing=usage.keyword_stuffing,
        headings=headings,
        links=links,
        images=images,
    )

    return AuditResult(
        metadata=metadata,
        structured_data=structured_data,
        open_graph=open_graph,
        headings=headings,
        links=links,
        anchors=anchors,
        images=images,
        word_count=word_count,
        intent=intent,
        keyword=keyword,
        keyword_frequency=usage.keyword_frequency,
        keyword_stuffing=usage.keyword_stuffing,
        suggestions=suggestions,
    )
