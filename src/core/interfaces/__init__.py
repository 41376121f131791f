"""Core interfaces/abstractions.

Why:
- Define contracts (Protocol) implemented by concrete adapters.
- Invert dependencies: the Core depends on abstractions, never on httpx or CI.
"""
