"""State store configuration models."""

from typing import Literal

from pydantic import BaseModel, Field


class StoreSettings(BaseModel):
    # best_effort: cache first, then log (a failed append leaves the cache ahead)
    # strict: log first, cache only after a successful append
    durability: Literal["best_effort", "strict"] = "best_effort"
    history_limit: int = Field(default=50, ge=0)
