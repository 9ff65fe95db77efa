"""tpology: a declarative resource inventory and its reference graph."""

__version__ = "0.1.0"
