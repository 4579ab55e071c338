"""
Stylesheet Patterns

Detection patterns for CSS and its preprocessors (SCSS, Sass, Less).
"""

from __future__ import annotations

import re

from claimcheck.models import PatternDefinition


STYLESHEET_PATTERNS: tuple[PatternDefinition, ...] = (

    # --- Responsive Design ---

    PatternDefinition(
        name="media_queries",
        expression=re.compile(r"@media\s*[^{]*\{[\s\S]*?\}"),
        category="responsive_design",
        weight=0.9,
        description="Media queries",
    ),
    PatternDefinition(
        name="viewport_units",
        expression=re.compile(r"\b\d+(?:\.\d+)?(?:vw|vh|vmin|vmax|dvw|dvh|svh|lvh)\b"),
        category="responsive_design",
        weight=0.8,
        description="Viewport-relative units",
    ),
    PatternDefinition(
        name="container_queries",
        expression=re.compile(r"@container\s*[^{]*\{[\s\S]*?\}"),
        category="responsive_design",
        weight=0.9,
        description="Container queries",
    ),
    PatternDefinition(
        name="fluid_typography",
        expression=re.compile(r"clamp\s*\([^)]*\)|(?:font-size|line-height)\s*:\s*calc\([^)]*\)"),
        category="responsive_design",
        weight=0.7,
        description="Fluid sizing with clamp() or calc()",
    ),

    # --- Flexbox ---

    PatternDefinition(
        name="flexbox_container",
        expression=re.compile(r"display\s*:\s*(?:inline-)?flex(?:box)?\b"),
        category="flexbox_layout",
        weight=0.8,
        description="Flex container declaration",
    ),
    PatternDefinition(
        name="flex_properties",
        expression=re.compile(r"(?<![\w-])(?:flex-direction|flex-wrap|flex-flow|justify-content|align-items|align-content|gap)\s*:"),
        category="flexbox_layout",
        weight=0.7,
        description="Flex container properties",
    ),
    PatternDefinition(
        name="flex_item_properties",
        expression=re.compile(r"(?<![\w-])(?:flex|flex-grow|flex-shrink|flex-basis|align-self|order)\s*:"),
        category="flexbox_layout",
        weight=0.6,
        description="Flex item properties",
    ),

    # --- Grid ---

    PatternDefinition(
        name="grid_container",
        expression=re.compile(r"display\s*:\s*(?:inline-)?grid\b"),
        category="grid_layout",
        weight=0.8,
        description="Grid container declaration",
    ),
    PatternDefinition(
        name="grid_template",
        expression=re.compile(r"grid-template(?:-columns|-rows|-areas)?\s*:"),
        category="grid_layout",
        weight=0.9,
        description="Grid template definitions",
    ),
    PatternDefinition(
        name="grid_item_properties",
        expression=re.compile(r"(?<![\w-])(?:grid-column|grid-row|grid-area|justify-self)\s*:"),
        category="grid_layout",
        weight=0.7,
        description="Grid item placement",
    ),

    # --- Accessibility ---

    PatternDefinition(
        name="screen_reader_only",
        expression=re.compile(r"\.(?:sr-only|visually-hidden|screen-reader-only)\s*\{[\s\S]*?\}"),
        category="accessibility",
        weight=0.8,
        description="Screen-reader-only utility classes",
    ),
    PatternDefinition(
        name="focus_styles",
        expression=re.compile(r":focus(?:-visible|-within)?\b[^{]*\{[\s\S]*?\}"),
        category="accessibility",
        weight=0.7,
        description="Focus state styling",
    ),
    PatternDefinition(
        name="reduced_motion",
        expression=re.compile(r"@media\s*\(\s*prefers-reduced-motion\s*:\s*reduce\s*\)"),
        category="accessibility",
        weight=0.9,
        description="Reduced motion preference",
    ),
    PatternDefinition(
        name="high_contrast",
        expression=re.compile(r"@media\s*\(\s*(?:prefers-contrast\s*:\s*(?:more|high)|forced-colors\s*:\s*active)\s*\)"),
        category="accessibility",
        weight=0.8,
        description="High contrast and forced colors",
    ),

    # --- Animations ---

    PatternDefinition(
        name="css_animations",
        expression=re.compile(r"@keyframes\s+[\w-]+|(?<![\w-])animation(?:-name|-duration|-timing-function|-delay|-iteration-count|-direction|-fill-mode|-play-state)?\s*:"),
        category="animations",
        weight=0.8,
        description="Keyframes and animation properties",
    ),
    PatternDefinition(
        name="css_transitions",
        expression=re.compile(r"(?<![\w-])transition(?:-property|-duration|-timing-function|-delay)?\s*:"),
        category="animations",
        weight=0.7,
        description="Transitions",
    ),
    PatternDefinition(
        name="transform_properties",
        expression=re.compile(r"transform\s*:\s*(?:translate|rotate|scale|skew|matrix|perspective)"),
        category="animations",
        weight=0.6,
        description="Transforms",
    ),

    # --- Dark Mode ---

    PatternDefinition(
        name="dark_mode_media",
        expression=re.compile(r"@media\s*\(\s*prefers-color-scheme\s*:\s*dark\s*\)"),
        category="dark_mode",
        weight=0.9,
        description="Dark color scheme media query",
    ),
    PatternDefinition(
        name="css_custom_properties",
        expression=re.compile(r"--[\w-]+\s*:|var\s*\(\s*--[\w-]+"),
        category="dark_mode",
        weight=0.7,
        description="Custom properties (CSS variables)",
    ),
    PatternDefinition(
        name="color_scheme_property",
        expression=re.compile(r"color-scheme\s*:\s*(?:light|dark|normal)(?:\s+(?:light|dark))?"),
        category="dark_mode",
        weight=0.8,
        description="color-scheme property",
    ),
    PatternDefinition(
        name="theme_selectors",
        expression=re.compile(r"\[data-theme\s*=\s*['\"]?dark['\"]?\]|\.dark(?:-mode|-theme)?\b"),
        category="dark_mode",
        weight=0.7,
        description="Dark theme selectors",
    ),

    # --- Performance ---

    PatternDefinition(
        name="will_change",
        expression=re.compile(r"will-change\s*:"),
        category="performance",
        weight=0.7,
        description="will-change hints",
    ),
    PatternDefinition(
        name="contain_property",
        expression=re.compile(r"(?<![\w-])contain\s*:\s*(?:layout|style|paint|size|strict|content)"),
        category="performance",
        weight=0.8,
        description="CSS containment",
    ),
    PatternDefinition(
        name="content_visibility",
        expression=re.compile(r"content-visibility\s*:\s*(?:visible|hidden|auto)"),
        category="performance",
        weight=0.9,
        description="content-visibility",
    ),

    # --- Modern CSS ---

    PatternDefinition(
        name="aspect_ratio",
        expression=re.compile(r"aspect-ratio\s*:"),
        category="modern_css",
        weight=0.7,
        description="aspect-ratio property",
    ),
    PatternDefinition(
        name="logical_properties",
        expression=re.compile(r"(?:margin|padding|border)-(?:inline|block)(?:-start|-end)?\s*:|(?:inline|block)-size\s*:"),
        category="modern_css",
        weight=0.6,
        description="Logical properties",
    ),
    PatternDefinition(
        name="subgrid",
        expression=re.compile(r"grid-template-(?:columns|rows)\s*:\s*subgrid"),
        category="modern_css",
        weight=0.8,
        description="Subgrid",
    ),

    # --- Utility Classes ---

    PatternDefinition(
        name="utility_classes",
        expression=re.compile(
            r"\.(?:flex|grid|hidden|block|inline|absolute|relative|fixed|sticky|"
            r"text-center|text-left|text-right|[mpwh][trblxy]?-\d+)\b"
        ),
        category="utility_first",
        weight=0.5,
        description="Utility-first classes",
    ),

    # --- Print ---

    PatternDefinition(
        name="print_styles",
        expression=re.compile(r"@media\s+print\b[^{]*\{[\s\S]*?\}"),
        category="print_styles",
        weight=0.7,
        description="Print styles",
    ),
)
