"""Source hosting API clients."""
