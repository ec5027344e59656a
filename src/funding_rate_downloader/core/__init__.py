"""Download orchestration and history file handling."""
