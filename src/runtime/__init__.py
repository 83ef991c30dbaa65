"""
Runtime plumbing.

Canonical imports:
- `from runtime.emitter import Emitter`
- `from runtime.context import RuntimeContext, build_runtime`
"""
