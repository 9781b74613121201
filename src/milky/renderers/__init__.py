"""Renderers for Milky.

Provides:
- html: ArticleRenderer for article body HTML
"""

from milky.renderers.html import ArticleRenderer, RenderContext, RenderResult

__all__ = ["ArticleRenderer", "RenderContext", "RenderResult"]
