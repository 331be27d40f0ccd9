# citerag/vector_db/plugins/__init__.py
"""Vector store backends."""
