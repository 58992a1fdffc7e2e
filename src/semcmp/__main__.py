"""Allow ``python -m semcmp``."""

from .cli import app

if __name__ == "__main__":
    app()
