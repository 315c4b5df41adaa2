"""
Brand Content Engine - semantic storage and profile analysis

Layers:
    1. Document Store - owner-scoped documents with embeddings and cosine search
    2. Version Store - append-only, gap-free context history
    3. Context Analyzer - keyword, topic, sentiment, readability and confidence metrics
    4. Writing Style Analyzer - tone, vocabulary, structure and brand voice profiling
"""

__version__ = "0.1.0"
