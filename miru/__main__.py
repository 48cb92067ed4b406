"""Allow running miru as ``python -m miru``."""

from miru.cli.commands import app

if __name__ == "__main__":
    app()
