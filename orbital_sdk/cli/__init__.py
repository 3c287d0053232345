"""Command-line interface for the Orbital SDK configurator."""
