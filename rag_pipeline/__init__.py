"""
rag_pipeline — Retrieval-Augmented Generation pipeline for plant-care chat.

Components:
  documents       — country records → flat text documents (truncated sub-lists)
  embedder        — text → vector via the Ollama embeddings endpoint
  knowledge_base  — all-or-nothing in-memory store, populated once at startup
  retriever       — cosine-similarity top-K ranking
  prompt          — instruction / context / user / assistant framing
  llm_engine      — Ollama non-streaming generation
  chat            — per-request orchestration with fail-open grounding
"""
