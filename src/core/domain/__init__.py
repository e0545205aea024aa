"""Domain models, actions and errors.

Why:
- Pure, strict data structures (Pydantic v2) live here.
- The domain knows nothing about HTTP, CLI or SDKs: only the collection,
  the commands that change it and their outcomes.
"""
