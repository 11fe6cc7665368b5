"""Pydantic configuration models for extraction and normalization."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..hashing import HashAlgo


class ContentScoreMultiplier(BaseModel):
    """Weights for the text-density score used by the fallback extraction layer."""

    non_whitespace_divisor: float = Field(50.0, gt=0, description="+1 score per this many non-whitespace chars")
    paragraphs: float = Field(5.0, ge=0, description="Score per <p>")
    headings: float = Field(10.0, ge=0, description="Score per <h1>-<h3>")
    code_blocks: float = Field(15.0, ge=0, description="Score per code block or inline code")
    list_items: float = Field(2.0, ge=0, description="Score per <li>")

    model_config = {"extra": "forbid", "frozen": True}


class MeaningfulThreshold(BaseModel):
    """Thresholds deciding whether a DOM subtree is real content."""

    min_non_whitespace: int = Field(50, ge=0, description="Minimum non-whitespace characters")
    min_headings: int = Field(0, ge=0, description="Headings must exceed this for the heading-only path")
    min_paragraphs_or_code: int = Field(1, ge=0, description="Minimum paragraphs or code blocks")
    max_link_density: float = Field(0.8, ge=0, le=1, description="Maximum share of text inside links")
    min_heading_text: int = Field(20, ge=0, description="Non-whitespace chars required alongside headings")

    model_config = {"extra": "forbid", "frozen": True}


class ExtractParam(BaseModel):
    """Scoring and threshold configuration for one extraction call."""

    body_specificity_bias: float = Field(
        0.75,
        ge=0,
        le=1,
        description="Prefer a descendant over <body> when it scores at least this share of the body",
    )
    link_density_threshold: float = Field(
        0.8,
        ge=0,
        le=1,
        description="Link density above which the content score is penalized",
    )
    score_multiplier: ContentScoreMultiplier = Field(default_factory=ContentScoreMultiplier)
    threshold: MeaningfulThreshold = Field(default_factory=MeaningfulThreshold)
    custom_selectors: tuple[str, ...] = Field(
        default=(),
        description="Extra CSS selectors tried after the built-in documentation selectors",
    )

    model_config = {"extra": "forbid", "frozen": True}


class NormalizeParam(BaseModel):
    """Per-page configuration for Markdown normalization."""

    app_version: str = Field(..., min_length=1, description="Crawler version recorded in frontmatter")
    fetched_at: datetime = Field(..., description="When the page was fetched")
    hash_algo: HashAlgo = Field(HashAlgo.SHA256, description="Algorithm for doc_id and content_hash")
    crawl_depth: int = Field(0, ge=0, description="Depth of the page from the seed URL")
    allowed_path_prefixes: tuple[str, ...] = Field(
        default=(),
        description="Path prefixes stripped before deriving the section, tried in order",
    )

    model_config = {"extra": "forbid", "frozen": True}
