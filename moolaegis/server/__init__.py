"""FastAPI server for Moolaegis."""
