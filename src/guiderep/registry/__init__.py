# src/guiderep/registry/__init__.py

from .guides import GuideRegistry

__all__ = ["GuideRegistry"]
