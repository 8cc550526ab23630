"""Dr.Triage — Завантаження конфігурації"""
import yaml
from pathlib import Path
from dataclasses import asdict
from .settings import DrTriageConfig


def save_yaml(config: DrTriageConfig, path: str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = asdict(config)
    # Секрети не пишемо на диск
    data["remote"]["app_key"] = ""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True)


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def save_config(config: DrTriageConfig, path: str) -> None:
    save_yaml(config, path)


def load_config(path: str) -> DrTriageConfig:
    return DrTriageConfig.from_dict(load_yaml(path))
