# citerag/logging/tags.py
"""
Subsystem tags prefixed to log lines so output stays greppable.

Changing a tag here updates it project-wide.
"""

CHUNKING = "[CHUNKING]"
EMBEDDING = "[EMBEDDING]"
VECTOR_DB = "[VECTOR_DB]"
RERANK = "[RERANK]"
PROMPT = "[PROMPT]"
CHAT = "[CHAT]"
INGEST = "[INGEST]"
PIPELINE = "[PIPELINE]"
API = "[API]"
CLI = "[CLI]"
