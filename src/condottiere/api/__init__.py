"""HTTP harness exposing the army operations over FastAPI."""
