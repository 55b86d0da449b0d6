from typing import Optional
from pydantic import BaseModel, Field


class SearchConfig(BaseModel):
    """Free-text search (Jaccard) settings."""
    relevance_floor: float = Field(default=0.01, ge=0, le=1)  # exclusive
    high_threshold: float = Field(default=0.1, ge=0, le=1)
    medium_threshold: float = Field(default=0.05, ge=0, le=1)
    default_k: int = Field(default=3, ge=1)
    max_k: int = Field(default=10, ge=1)
    snippets_per_result: int = Field(default=2, ge=0)


class MatchConfig(BaseModel):
    """Job-to-resume keyword matching settings."""
    strong_threshold: float = Field(default=0.3, ge=0, le=1)
    moderate_threshold: float = Field(default=0.1, ge=0, le=1)
    default_top_n: int = Field(default=5, ge=1)
    max_top_n: int = Field(default=20, ge=1)
    evidence_limit: int = Field(default=5, ge=0, le=5)
    score_precision: Optional[int] = 2  # decimals kept in reported scores


class RelevanceConfig(BaseModel):
    """
    Configuration for the relevance core.

    Defaults reproduce the thresholds the stored history was scored with.
    """
    search: SearchConfig = Field(default_factory=SearchConfig)
    match: MatchConfig = Field(default_factory=MatchConfig)
