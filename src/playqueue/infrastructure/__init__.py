"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (JSON snapshot file)
- Preprocessors (background URL expansion)
- HTTP (FastAPI resource adapter)
"""
