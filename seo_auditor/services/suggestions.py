"""
Rule-based SEO suggestions built from extracted signals.

Rules are independent: every rule that fires contributes one message.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seo_auditor.services.seo_checker import Headings, ImageStats, LinkStats


def generate_suggestions(
    keyword: str | None,
    keyword_frequency: int,
    keyword_stuffing: bool,
    headings: "Headings",
    links: "LinkStats",
    images: "ImageStats",
) -> list[str]:
    suggestions = []

    if keyword and keyword_stuffing:
        suggestions.append(
            f'The keyword "{keyword}" appears {keyword_frequency} times, which may be excessive.'
        )
    if headings.h1 == 0:
        suggestions.append("No top-level heading found.")
    if links.internal == 0:
        suggestions.append("No internal links found.")
    if images.missing_alt > 0:
        suggestions.append(f"{images.missing_alt} images are missing alt attributes.")

    return suggestions
