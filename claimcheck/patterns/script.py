"""
Script Patterns

Detection patterns for JavaScript and TypeScript sources (including
React components and test files).
"""

from __future__ import annotations

import re

from claimcheck.models import PatternDefinition


SCRIPT_PATTERNS: tuple[PatternDefinition, ...] = (

    # --- Error Handling ---

    PatternDefinition(
        name="try_catch_blocks",
        expression=re.compile(r"try\s*\{[\s\S]*?\}\s*catch\s*(?:\([^)]*\))?\s*\{[\s\S]*?\}"),
        category="error_handling",
        weight=0.9,
        description="Try/catch error handling blocks",
    ),
    PatternDefinition(
        name="throw_statements",
        expression=re.compile(r"throw\s+(?:new\s+)?[\w.]+(?:\([^)]*\))?"),
        category="error_handling",
        weight=0.7,
        description="Throw statements",
    ),
    PatternDefinition(
        name="error_objects",
        expression=re.compile(r"new\s+(?:\w+)?Error\s*\("),
        category="error_handling",
        weight=0.6,
        description="Error object instantiation",
    ),

    # --- Async ---

    PatternDefinition(
        name="async_functions",
        expression=re.compile(
            r"async\s+function\s*\w*\s*\([^)]*\)|"
            r"async\s*\([^)]*\)\s*=>|"
            r"async\s+\w+\s*=>"
        ),
        category="async_await",
        weight=0.8,
        description="Async function declarations and async arrows",
    ),
    PatternDefinition(
        name="await_expressions",
        expression=re.compile(r"await\s+[\w.()\[\]]+"),
        category="async_await",
        weight=0.9,
        description="Await expressions",
    ),
    PatternDefinition(
        name="promise_chains",
        expression=re.compile(r"\.then\s*\([^)]*\)(?:\s*\.catch\s*\([^)]*\))?"),
        category="async_promises",
        weight=0.7,
        description="Promise chains with then/catch",
    ),
    PatternDefinition(
        name="promise_combinators",
        expression=re.compile(r"Promise\.(?:all|allSettled|race|any)\s*\("),
        category="async_promises",
        weight=0.8,
        description="Promise.all / allSettled / race / any",
    ),

    # --- Validation ---

    PatternDefinition(
        name="input_validation",
        expression=re.compile(
            r"if\s*\(\s*(?:!\s*\w+|typeof\s+\w+|Array\.isArray\s*\(|"
            r"Number\.isNaN\s*\(|\w+(?:\.\w+)*\.length\b)"
        ),
        category="validation",
        weight=0.6,
        description="Guard clauses validating inputs",
    ),
    PatternDefinition(
        name="null_checks",
        expression=re.compile(
            r"[!=]==?\s*(?:null|undefined)\b|\b(?:null|undefined)\s*[!=]==?"
        ),
        category="validation",
        weight=0.7,
        description="Null and undefined checks",
    ),
    PatternDefinition(
        name="type_checks",
        expression=re.compile(
            r"typeof\s+\w+\s*[!=]==?\s*['\"](?:string|number|boolean|object|function|undefined|bigint|symbol)['\"]"
        ),
        category="validation",
        weight=0.8,
        description="typeof checks against primitive type names",
    ),

    # --- Performance ---

    PatternDefinition(
        name="memoization",
        expression=re.compile(
            r"\b(?:useMemo|useCallback|memo)\s*\(|"
            r"\b(?:const|let|var)\s+\w+\s*=\s*new\s+(?:Weak)?Map\s*\(\s*\)|"
            r"\bmemoi[sz]e\w*|\bcache\w*",
            re.IGNORECASE,
        ),
        category="performance_optimization",
        weight=0.7,
        description="Memoization and caching",
    ),
    PatternDefinition(
        name="debounce_throttle",
        expression=re.compile(r"\b(?:debounce|throttle|requestAnimationFrame|requestIdleCallback)\s*\("),
        category="performance_optimization",
        weight=0.6,
        description="Debouncing, throttling and frame scheduling",
    ),
    PatternDefinition(
        name="lazy_loading",
        expression=re.compile(r"\b(?:React\.)?lazy\s*\(|<Suspense\b|\bimport\s*\(|\bdynamic\s*\("),
        category="performance_optimization",
        weight=0.8,
        description="Lazy loading and dynamic imports",
    ),

    # --- Security ---

    PatternDefinition(
        name="sanitization",
        expression=re.compile(
            r"\b(?:escape\w*|sanitize\w*|DOMPurify|encodeURI(?:Component)?)\b|\.textContent\b"
        ),
        category="security",
        weight=0.8,
        description="Input sanitization and output encoding",
    ),
    PatternDefinition(
        name="csrf_protection",
        expression=re.compile(r"\b(?:csrf|xsrf)[-_]?(?:token|protection)\b|X-CSRF-TOKEN", re.IGNORECASE),
        category="security",
        weight=0.9,
        description="CSRF tokens and protection middleware",
    ),

    # --- Testing ---

    PatternDefinition(
        name="test_functions",
        expression=re.compile(r"\b(?:describe|it|test|expect|beforeEach|afterEach|beforeAll|afterAll)\s*\("),
        category="testing",
        weight=0.7,
        description="Test blocks and assertions",
    ),
    PatternDefinition(
        name="mock_patterns",
        expression=re.compile(r"\b(?:jest|vi)\.(?:fn|mock|spyOn)\b|\bsinon\.\w+|\bmock\w*\s*\("),
        category="testing",
        weight=0.8,
        description="Mocks, spies and stubs",
    ),

    # --- Documentation ---

    PatternDefinition(
        name="jsdoc_comments",
        expression=re.compile(r"/\*\*[\s\S]*?\*/"),
        category="documentation",
        weight=0.5,
        description="JSDoc comment blocks",
    ),
    PatternDefinition(
        name="inline_comments",
        expression=re.compile(r"(?<![:\"'])//.*$", re.MULTILINE),
        category="documentation",
        weight=0.3,
        description="Inline // comments",
    ),

    # --- TypeScript ---

    PatternDefinition(
        name="type_annotations",
        expression=re.compile(
            r":\s*(?:string|number|boolean|object|any|unknown|never|void|[A-Z]\w*)(?:\[\])?\s*[=;,)]"
        ),
        category="typescript_types",
        weight=0.8,
        description="Type annotations on bindings and parameters",
    ),
    PatternDefinition(
        name="interfaces",
        expression=re.compile(r"\binterface\s+\w+(?:\s+extends\s+[\w, ]+)?\s*\{[\s\S]*?\}"),
        category="typescript_types",
        weight=0.9,
        description="Interface declarations",
    ),
    PatternDefinition(
        name="type_aliases",
        expression=re.compile(r"\btype\s+[A-Z]\w*(?:<[^>]*>)?\s*="),
        category="typescript_types",
        weight=0.8,
        description="Type alias declarations",
    ),
    PatternDefinition(
        name="generic_types",
        expression=re.compile(r"<[A-Z]\w*(?:\s*,\s*[A-Z]\w*)*>"),
        category="typescript_types",
        weight=0.7,
        description="Generic type parameters",
    ),

    # --- React ---

    PatternDefinition(
        name="react_hooks",
        expression=re.compile(r"\buse(?:State|Effect|Context|Reducer|Ref|LayoutEffect|[A-Z]\w+)\s*\("),
        category="react_hooks",
        weight=0.8,
        description="React hook calls",
    ),
    PatternDefinition(
        name="react_components",
        expression=re.compile(
            r"\b(?:function|const)\s+[A-Z]\w*\s*(?:=\s*)?\([^)]*\)\s*(?:=>\s*)?[({][\s\S]*?<[A-Za-z]"
        ),
        category="react_component",
        weight=0.7,
        description="Function components returning JSX",
    ),

    # --- Modern JavaScript ---

    PatternDefinition(
        name="destructuring",
        expression=re.compile(r"\b(?:const|let|var)\s*(?:\{[^}]+\}|\[[^\]]+\])\s*="),
        category="modern_javascript",
        weight=0.5,
        description="Destructuring assignments",
    ),
    PatternDefinition(
        name="arrow_functions",
        expression=re.compile(r"(?:\([^)]*\)|\b\w+)\s*=>"),
        category="modern_javascript",
        weight=0.4,
        description="Arrow function expressions",
    ),
    PatternDefinition(
        name="template_literals",
        expression=re.compile(r"`[^`]*\$\{[^}]+\}[^`]*`"),
        category="modern_javascript",
        weight=0.4,
        description="Template literals with interpolation",
    ),
)
