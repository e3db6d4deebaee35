"""Command line demo for config-loadr."""
