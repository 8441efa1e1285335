"""Build a static HTML site from a tree of YAML page descriptors."""

__version__ = "0.1.0"
