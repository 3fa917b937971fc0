"""Network matrices, PageRank and data gathering for ranking open-source projects."""

__version__ = "0.1.0"

__all__ = [
    "adjacency",
    "hyperparams",
    "pagerank",
    "source_contributions",
    "source_dependencies",
]