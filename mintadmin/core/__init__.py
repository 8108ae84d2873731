"""Core components: configuration, template loading, cancellation"""

from .cancellation import CancellationToken
from .config_loader import AdminConfig, ConfigLoader
from .template import StackTemplate, load_template

__all__ = [
    "CancellationToken",
    "AdminConfig",
    "ConfigLoader",
    "StackTemplate",
    "load_template",
]
