"""Application layer for the ML scoring plugin."""
