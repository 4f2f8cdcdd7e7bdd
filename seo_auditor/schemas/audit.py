"""
Audit API schemas.
"""
from typing import List, Optional, Union

from pydantic import Field

from seo_auditor.schemas.common import BaseSchema


class MetadataSchema(BaseSchema):
    title: Optional[str] = None
    description: Optional[str] = None
    canonical: Optional[str] = None
    robots: Optional[str] = None


class StructuredDataSchema(BaseSchema):
    types: List[str] = []
    has_microdata: bool = False


class OpenGraphSchema(BaseSchema):
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None


class HeadingsSchema(BaseSchema):
    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0
    h6: int = 0


class LinkStatsSchema(BaseSchema):
    total: int = 0
    internal: int = 0
    external: int = 0


class AnchorSchema(BaseSchema):
    index: int
    href: str
    text: str
    type: str = Field(..., description="dofollow or nofollow")
    is_internal: bool


class ImageDetailSchema(BaseSchema):
    index: int
    src: str
    alt: str
    missing: bool


class ImageStatsSchema(BaseSchema):
    total: int = 0
    missing_alt: int = 0
    details: List[ImageDetailSchema] = []


class RedirectHopSchema(BaseSchema):
    url: str
    status: int


class AuditResultSchema(BaseSchema):
    """SEO signals, scores and suggestions for one page."""

    metadata: MetadataSchema
    structured_data: StructuredDataSchema
    open_graph: OpenGraphSchema
    headings: HeadingsSchema
    links: LinkStatsSchema
    anchors: List[AnchorSchema] = []
    images: ImageStatsSchema
    word_count: int
    intent: str
    keyword: Optional[str] = None
    keyword_frequency: int = 0
    keyword_stuffing: bool = False
    suggestions: List[str] = []


class AuditResponse(AuditResultSchema):
    """Single-page audit including the redirect chain that led to it."""

    url: str
    redirect_chain: List[RedirectHopSchema] = []


class PageAuditSuccessSchema(BaseSchema):
    url: str
    audit: AuditResultSchema


class PageAuditFailureSchema(BaseSchema):
    url: str
    error: str


class FullAuditResponse(BaseSchema):
    homepage: str
    total_urls: int
    audited_urls: int
    results: List[Union[PageAuditSuccessSchema, PageAuditFailureSchema]] = []
