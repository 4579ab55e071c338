"""
Markup Patterns

Detection patterns for HTML documents and templates.
"""

from __future__ import annotations

import re

from claimcheck.models import PatternDefinition


_I = re.IGNORECASE

MARKUP_PATTERNS: tuple[PatternDefinition, ...] = (

    # --- Accessibility ---

    PatternDefinition(
        name="aria_attributes",
        expression=re.compile(r"\baria-[a-z]+\s*=", _I),
        category="accessibility",
        weight=0.9,
        description="ARIA attributes",
    ),
    PatternDefinition(
        name="image_alt_text",
        expression=re.compile(r"<img\b[^>]*\balt\s*=\s*(?:\"[^\"]*\"|'[^']*')", _I),
        category="accessibility",
        weight=0.8,
        description="Images with alt text",
    ),
    PatternDefinition(
        name="role_attributes",
        expression=re.compile(r"\brole\s*=\s*[\"'][\w-]+[\"']", _I),
        category="accessibility",
        weight=0.6,
        description="Explicit landmark and widget roles",
    ),
    PatternDefinition(
        name="form_labels",
        expression=re.compile(r"<label\b[^>]*\bfor\s*=", _I),
        category="accessibility",
        weight=0.7,
        description="Labels bound to form controls",
    ),

    # --- Semantic HTML ---

    PatternDefinition(
        name="semantic_elements",
        expression=re.compile(r"<(?:header|footer|nav|main|section|article|aside|figure)\b", _I),
        category="semantic_html",
        weight=0.8,
        description="Sectioning and landmark elements",
    ),
    PatternDefinition(
        name="heading_structure",
        expression=re.compile(r"<h[1-6]\b", _I),
        category="semantic_html",
        weight=0.5,
        description="Heading elements",
    ),

    # --- Form Validation ---

    PatternDefinition(
        name="required_fields",
        expression=re.compile(r"<(?:input|select|textarea)\b[^>]*\brequired\b", _I),
        category="form_validation",
        weight=0.8,
        description="Required form controls",
    ),
    PatternDefinition(
        name="input_constraints",
        expression=re.compile(r"<input\b[^>]*\b(?:pattern|minlength|maxlength|min|max|step)\s*=", _I),
        category="form_validation",
        weight=0.7,
        description="Constraint attributes on inputs",
    ),
    PatternDefinition(
        name="typed_inputs",
        expression=re.compile(r"<input\b[^>]*\btype\s*=\s*[\"']?(?:email|url|tel|number|date)\b", _I),
        category="form_validation",
        weight=0.6,
        description="Inputs with validating types",
    ),

    # --- Responsive Design ---

    PatternDefinition(
        name="viewport_meta",
        expression=re.compile(r"<meta\b[^>]*\bname\s*=\s*[\"']viewport[\"']", _I),
        category="responsive_design",
        weight=0.9,
        description="Viewport meta tag",
    ),
    PatternDefinition(
        name="responsive_images",
        expression=re.compile(r"<(?:img|source)\b[^>]*\bsrcset\s*=|<picture\b", _I),
        category="responsive_design",
        weight=0.7,
        description="srcset and picture elements",
    ),

    # --- Performance ---

    PatternDefinition(
        name="lazy_loading_attributes",
        expression=re.compile(r"\bloading\s*=\s*[\"']lazy[\"']", _I),
        category="performance",
        weight=0.8,
        description="Native lazy loading",
    ),
    PatternDefinition(
        name="resource_hints",
        expression=re.compile(r"<link\b[^>]*\brel\s*=\s*[\"'](?:preload|prefetch|preconnect|dns-prefetch)[\"']", _I),
        category="performance",
        weight=0.7,
        description="Preload and prefetch hints",
    ),
    PatternDefinition(
        name="deferred_scripts",
        expression=re.compile(r"<script\b[^>]*\b(?:defer|async)\b", _I),
        category="performance",
        weight=0.6,
        description="Deferred and async scripts",
    ),

    # --- SEO Metadata ---

    PatternDefinition(
        name="meta_description",
        expression=re.compile(r"<meta\b[^>]*\bname\s*=\s*[\"']description[\"']", _I),
        category="seo_metadata",
        weight=0.7,
        description="Meta description",
    ),
    PatternDefinition(
        name="open_graph_tags",
        expression=re.compile(r"<meta\b[^>]*\bproperty\s*=\s*[\"']og:", _I),
        category="seo_metadata",
        weight=0.6,
        description="Open Graph tags",
    ),

    # --- Security ---

    PatternDefinition(
        name="content_security_policy",
        expression=re.compile(r"<meta\b[^>]*\bhttp-equiv\s*=\s*[\"']Content-Security-Policy[\"']", _I),
        category="security",
        weight=0.9,
        description="Content-Security-Policy meta tag",
    ),
    PatternDefinition(
        name="noopener_links",
        expression=re.compile(r"\brel\s*=\s*[\"'][^\"']*\bno(?:opener|referrer)\b", _I),
        category="security",
        weight=0.7,
        description="Links opened with noopener/noreferrer",
    ),
    PatternDefinition(
        name="subresource_integrity",
        expression=re.compile(r"\bintegrity\s*=\s*[\"']sha(?:256|384|512)-", _I),
        category="security",
        weight=0.8,
        description="Subresource integrity hashes",
    ),
)
