"""Local cache of remote git repositories holding inventories."""

from tpology.git.cache import Cache, Repository, clean_url

__all__ = ["Cache", "Repository", "clean_url"]
