"""True-randomness sources with a name-based registry."""

from fortune_score.remote.base import RandomSource, RandomSourceRegistry
from fortune_score.remote.random_org import RandomOrgSource, fetch_remote_score

__all__ = ["RandomOrgSource", "RandomSource", "RandomSourceRegistry", "fetch_remote_score"]
