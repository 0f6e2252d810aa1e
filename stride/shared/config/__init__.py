"""
Shared Config Module
====================

YAML configuration files loaded by :mod:`stride.shared.core.configuration`.

Structure:
- settings/: defaults.yaml, plus optional user.yaml and project.yaml overrides
"""

from pathlib import Path

SETTINGS_DIR = Path(__file__).parent / "settings"

__all__ = ["SETTINGS_DIR"]
