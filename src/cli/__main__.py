"""Allow ``python -m src.cli`` execution (runs the lookup tool)."""

from src.cli.lookup import main

main()
