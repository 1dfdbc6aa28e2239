"""
Data access layer.

Design rules:
- The controller calls ONLY TodoOrchestration (orchestration.py).
- Storage failures fall back to the in-memory mock (storage.open_storage).
- No env var reads here (config-only).
"""
