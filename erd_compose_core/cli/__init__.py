from erd_compose_core.cli.cli import main

__all__ = ["main"]
