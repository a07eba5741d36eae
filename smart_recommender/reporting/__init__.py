"""
Reporting helpers for the CLI.

Submodules:
  formatters — ASCII tables and score bands for terminal output
"""
