"""
webpage_rag - scrape web pages into a vector store and answer questions
grounded in the most relevant ones.

Subpackages
-----------
- :mod:`webpage_rag.extraction` - URL → text.
- :mod:`webpage_rag.storage` - vector persistence and similarity search.
- :mod:`webpage_rag.pipeline` - ingestion, retrieval, and conversation.
- :mod:`webpage_rag.serving` - HTTP and KServe boundaries.
"""

__version__ = "0.1.0"
