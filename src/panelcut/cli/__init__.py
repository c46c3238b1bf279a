"""Command-line interface for panelcut."""
