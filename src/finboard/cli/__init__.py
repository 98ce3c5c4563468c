"""Command-line interface for finboard."""
