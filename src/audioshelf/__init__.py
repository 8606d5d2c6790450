# ABOUTME: audioshelf - discovers audiobooks on disk and keeps a browsable catalog.
# ABOUTME: Package root; subpackages hold the catalog engine, storage, probing, and CLI.

__version__ = "0.1.0"
