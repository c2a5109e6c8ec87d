"""
Root pytest configuration for the Django project.

pytest-django reads DJANGO_SETTINGS_MODULE from pyproject.toml; this module
only guarantees the same default when tests are launched from another root.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
