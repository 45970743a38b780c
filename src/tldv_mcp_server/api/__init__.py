"""HTTP client for the tl;dv public API."""

from .client import TldvApi

__all__ = ["TldvApi"]
