"""gelf command-line interface."""
