"""Allow ``python -m blogkit``."""

from blogkit.cli.main import app

if __name__ == "__main__":
    app()
