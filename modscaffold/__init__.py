"""modscaffold -- module-aware source scaffolding engine.

Generates source files for self-contained application modules from stub
templates: resolves where each component goes and what its namespace is,
fills the stub placeholders and records every outcome in a ledger.
"""

__version__ = "0.1.0"
