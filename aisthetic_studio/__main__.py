# aisthetic_studio/__main__.py
"""Entry point for `python -m aisthetic_studio`."""

from aisthetic_studio.cli import app

if __name__ == "__main__":
    app()
