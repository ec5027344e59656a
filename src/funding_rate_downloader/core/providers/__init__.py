"""Exchange-specific REST providers."""
