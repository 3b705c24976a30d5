"""Allow ``python -m jsonstore``."""

from jsonstore.cli import app

if __name__ == "__main__":
    app()
