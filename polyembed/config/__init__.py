"""Configuration module - exports Settings."""

from polyembed.config.settings import Settings

__all__ = ["Settings"]
