"""
Module: paper

Purpose:
    Paper metadata and the subset of site settings the renderer consumes.

Key Functions:
    - resolve_watermark_text(): Site name substitution with defaults

Key Classes:
    - Paper: Title/description/slug of a printable paper
    - Settings: Watermark toggle, template and site name

Dependencies:
    - dataclasses (std)

Used By:
    - render.director: Header and decoration pass
    - core.serialization: Payload loading
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_WATERMARK_TEXT = "Downloaded From {siteName}"
DEFAULT_SITE_NAME = "Prepify"
SITE_NAME_PLACEHOLDER = "{siteName}"
DOCUMENT_EXTENSION = ".pdf"


def resolve_watermark_text(template: str, site_name: str) -> str:
    """
    Substitute the site name into a watermark template.

    Blank or whitespace-only values fall back to DEFAULT_WATERMARK_TEXT
    and DEFAULT_SITE_NAME. Every {siteName} occurrence is replaced.

    Example:
        >>> resolve_watermark_text("Copy of {siteName}", "  ")
        'Copy of Prepify'
    """
    if not (template or "").strip():
        template = DEFAULT_WATERMARK_TEXT
    if not (site_name or "").strip():
        site_name = DEFAULT_SITE_NAME
    return template.replace(SITE_NAME_PLACEHOLDER, site_name.strip())


@dataclass(frozen=True)
class Paper:
    """
    Paper metadata (immutable).

    Attributes:
        title: Paper title shown in the header
        description: Short description shown under the title
        slug: URL slug, used only as an output filename hint

    Example:
        >>> Paper(title="Physics 101", description="", slug="physics-101").filename
        'physics-101.pdf'
    """

    title: str
    description: str = ""
    slug: str = ""

    @property
    def filename(self) -> str:
        """Suggested document filename."""
        stem = self.slug.strip() or "paper"
        return f"{stem}{DOCUMENT_EXTENSION}"

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "description": self.description, "slug": self.slug}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Paper:
        """Build from a stored paper document; unrelated fields are ignored."""
        return cls(
            title=data.get("title", ""),
            description=data.get("description") or "",
            slug=data.get("slug") or "",
        )


@dataclass(frozen=True)
class Settings:
    """
    Site settings consumed by the decoration pass (immutable).

    Attributes:
        pdf_watermark_enabled: Whether every page gets a watermark
        pdf_watermark_text: Template, may contain {siteName} and line breaks
        site_name: Value substituted for {siteName}
    """

    pdf_watermark_enabled: bool = False
    pdf_watermark_text: str = DEFAULT_WATERMARK_TEXT
    site_name: str = DEFAULT_SITE_NAME

    def watermark_text(self) -> str:
        """Template with the site name substituted (defaults for blank values)."""
        return resolve_watermark_text(self.pdf_watermark_text, self.site_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pdfWatermarkEnabled": self.pdf_watermark_enabled,
            "pdfWatermarkText": self.pdf_watermark_text,
            "siteName": self.site_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        return cls(
            pdf_watermark_enabled=bool(data.get("pdfWatermarkEnabled", False)),
            pdf_watermark_text=data.get("pdfWatermarkText") or DEFAULT_WATERMARK_TEXT,
            site_name=data.get("siteName") or DEFAULT_SITE_NAME,
        )
