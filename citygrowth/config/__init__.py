"""Configuration management package.

This package provides functionality for loading and managing generation configuration.
It includes tools for handling configuration files and providing access to generation
parameters throughout the application.
"""

from citygrowth.config.config_loader import Config

__all__ = ['Config']
