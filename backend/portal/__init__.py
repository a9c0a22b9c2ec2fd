"""Team Portal backend: accounts, sessions, preferences and gated pages."""
