"""LLM integration layer.

This package is intentionally small and conservative:
- No prompt/output logging.
- Configurable via environment variables.
- One outbound call per generation; callers decide how failures surface.
"""
