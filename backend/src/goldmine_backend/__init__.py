"""Goldmine backend package wiring and entrypoints."""

from goldmine_backend.main import run_dev, run_migrate, run_prod
from goldmine_backend.settings import BackendSettings, get_settings

main = run_dev

__all__ = [
    "BackendSettings",
    "get_settings",
    "main",
    "run_dev",
    "run_migrate",
    "run_prod",
]
