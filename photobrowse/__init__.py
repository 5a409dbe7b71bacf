"""Browse a paginated remote photo gallery with a page-crossing viewer."""

__version__ = "0.1.0"
