"""CLI command modules for amp-validator."""
