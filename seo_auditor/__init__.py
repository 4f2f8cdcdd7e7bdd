"""
SEO Auditor

Single-page SEO audits, sitemap/robots/navigation URL discovery, and
LLM-written recommendations, served over FastAPI.
"""

__version__ = "0.1.0"
