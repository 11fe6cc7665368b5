"""Known documentation container selectors."""

from typing import Iterable

# Container selectors of popular documentation frameworks, ordered by
# specificity and reliability within each framework.
KNOWN_DOC_SELECTORS: dict[str, list[str]] = {
    "generic": [
        ".content",
        ".doc-content",
        ".markdown-body",
        "#docs-content",
        ".rst-content",
        ".theme-doc-markdown",
        ".md-content",
    ],
    "docusaurus": [
        ".theme-doc-markdown",
        ".docMainContainer",
    ],
    "gitbook": [
        ".book-body",
        ".markdown-section",
    ],
    "mkdocs": [
        ".md-content",
        ".md-main__inner",
    ],
    "sphinx": [
        ".rst-content",
        ".document",
    ],
    "vuepress": [
        ".theme-default-content",
        ".content__default",
    ],
    "docsify": [
        "#main",
        ".content",
    ],
    "hexo": [
        ".post-content",
        ".article-content",
    ],
    "jekyll": [
        ".post-content",
        ".entry-content",
    ],
}

# Generic selectors first, then frameworks in priority order
FRAMEWORK_ORDER = [
    "generic",
    "docusaurus",
    "sphinx",
    "mkdocs",
    "gitbook",
    "vuepress",
    "docsify",
    "hexo",
    "jekyll",
]


def merge_selectors(*groups: Iterable[str]) -> list[str]:
    """Concatenate selector groups, keeping the first occurrence of each selector."""
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for selector in group:
            if selector not in seen:
                seen.add(selector)
                merged.append(selector)
    return merged


def get_all_selectors() -> list[str]:
    """Flattened, de-duplicated list of built-in selectors in priority order."""
    return merge_selectors(*(KNOWN_DOC_SELECTORS[name] for name in FRAMEWORK_ORDER))
