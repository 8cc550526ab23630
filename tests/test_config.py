"""
Тести для модуля config

Запуск: pytest tests/test_config.py -v
"""

import pytest


def test_default_config():
    """Тест конфігурації за замовчуванням"""
    from dr_triage.config import get_default_config

    config = get_default_config()

    assert config.project_name == "Dr.Triage"
    assert config.interview.max_questions == 5
    assert config.interview.max_present_evidence == 4
    assert config.interview.max_conditions == 5
    assert config.interview.min_probability == 0.1
    assert config.interview.probability_cap == 0.95
    assert config.remote.base_url == "https://api.infermedica.com/v3"
    assert not config.remote.is_configured

    print(f"✓ Config: v{config.version}, max_questions={config.interview.max_questions}")


def test_default_config_is_fresh():
    """Кожен виклик повертає новий об'єкт"""
    from dr_triage.config import get_default_config

    a = get_default_config()
    a.interview.max_questions = 9

    assert get_default_config().interview.max_questions == 5


def test_interview_config_validation():
    """Некоректні параметри → ConfigurationError"""
    from dr_triage.config import InterviewConfig
    from dr_triage.exceptions import ConfigurationError

    with pytest.raises(ConfigurationError):
        InterviewConfig(max_questions=0)

    with pytest.raises(ConfigurationError):
        InterviewConfig(min_probability=0.96, probability_cap=0.95)

    with pytest.raises(ConfigurationError):
        InterviewConfig(max_present_evidence=0)

    with pytest.raises(ConfigurationError):
        InterviewConfig(search_limit=0)


def test_remote_config():
    """Тест RemoteBackendConfig"""
    from dr_triage.config import RemoteBackendConfig
    from dr_triage.exceptions import ConfigurationError

    remote = RemoteBackendConfig(base_url="https://example.test/v3/", app_id="id", app_key="key")

    assert remote.base_url == "https://example.test/v3"
    assert remote.is_configured

    assert not RemoteBackendConfig(app_id="id").is_configured

    with pytest.raises(ConfigurationError):
        RemoteBackendConfig(timeout_seconds=0)


def test_from_env(monkeypatch):
    """Тест конфігурації з environment variables"""
    from dr_triage.config import DrTriageConfig

    monkeypatch.setenv("INFERMEDICA_APP_ID", "app-id")
    monkeypatch.setenv("INFERMEDICA_APP_KEY", "app-key")
    monkeypatch.setenv("INFERMEDICA_DEV_MODE", "false")
    monkeypatch.setenv("DR_TRIAGE_MAX_QUESTIONS", "7")

    config = DrTriageConfig.from_env()

    assert config.remote.is_configured
    assert config.remote.dev_mode is False
    assert config.interview.max_questions == 7
    assert config.interview.max_present_evidence == 4


def test_from_dict_rejects_unknown_keys():
    """Невідомі ключі → ConfigurationError"""
    from dr_triage.config import DrTriageConfig
    from dr_triage.exceptions import ConfigurationError

    config = DrTriageConfig.from_dict({"interview": {"max_questions": 3}})
    assert config.interview.max_questions == 3

    with pytest.raises(ConfigurationError):
        DrTriageConfig.from_dict({"interview": {"max_question": 3}})

    with pytest.raises(ConfigurationError):
        DrTriageConfig.from_dict({"som": {}})


def test_yaml_roundtrip(tmp_path):
    """Збереження та завантаження YAML (ключ не пишеться на диск)"""
    from dr_triage.config import DrTriageConfig, RemoteBackendConfig, save_config, load_config, load_yaml

    config = DrTriageConfig(remote=RemoteBackendConfig(app_id="id", app_key="secret"))
    config.interview.max_questions = 8

    path = tmp_path / "config" / "dr_triage.yaml"
    save_config(config, str(path))

    assert load_yaml(str(path))["remote"]["app_key"] == ""

    loaded = load_config(str(path))
    assert loaded.interview.max_questions == 8
    assert loaded.remote.app_id == "id"
    assert not loaded.remote.is_configured

    print(f"✓ YAML: {path.name}")
