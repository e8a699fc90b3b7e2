"""CLI helpers: consoles, error handling and signal setup."""
