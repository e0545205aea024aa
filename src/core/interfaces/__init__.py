"""Core interfaces.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the core depends on abstractions only.
"""
