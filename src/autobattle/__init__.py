"""Turn-based auto-battle combat engine."""
