"""Configuration, logging, time and rate limiting utilities."""
