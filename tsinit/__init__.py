"""tsinit -- TypeScript project scaffolding."""

__version__ = "0.1.0"
