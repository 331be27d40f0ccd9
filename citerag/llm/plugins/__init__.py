# citerag/llm/plugins/__init__.py
"""Model service plugins."""
