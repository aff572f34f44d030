# aisthetic_studio/__init__.py
"""aisthetic-studio: batch orchestration for AI-generated product creatives."""

__version__ = "0.4.0"
