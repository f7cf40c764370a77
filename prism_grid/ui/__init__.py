"""User interface package for the prism grid puzzle."""

from .main import (
    LEVEL_ENV_VAR,
    PrismGameApp,
    UIDirectories,
    bootstrap_directories,
    main,
    resolve_directories,
    run,
)
from .toolkit import PrismGameUI

__all__ = [
    "LEVEL_ENV_VAR",
    "UIDirectories",
    "PrismGameApp",
    "PrismGameUI",
    "bootstrap_directories",
    "main",
    "resolve_directories",
    "run",
]
