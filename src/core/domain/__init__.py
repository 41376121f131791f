"""Domain models and entities.

Why:
- Pure, strict data structures live here (Pydantic v2 and enums).
- The domain knows nothing about HTTP, the CLI or vendor SDKs.
"""
