"""Command-line tools for ipcountry.

- ``python -m src.cli.lookup``: resolve one or more addresses to country
  codes using the configured provider chain.
"""
