"""Dr.Triage — Модуль конфігурації"""
from .settings import (
    DrTriageConfig,
    get_default_config,
    InterviewConfig,
    RemoteBackendConfig,
)
from .loader import save_config, load_config, save_yaml, load_yaml

__all__ = [
    "DrTriageConfig",
    "get_default_config",
    "InterviewConfig",
    "RemoteBackendConfig",
    "save_config",
    "load_config",
    "save_yaml",
    "load_yaml",
]
