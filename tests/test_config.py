import pytest

from grocery_utils.config import Settings


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.ai_provider == "auto"
    assert settings.openai_api_key is None
    assert settings.ai_timeout == 30.0


def test_values_from_environment():
    settings = Settings.from_env(
        {
            "GROCERY_DB_PATH": "/tmp/g.db",
            "GROCERY_AI_PROVIDER": " Bedrock ",
            "OPENAI_API_KEY": "",
            "BEDROCK_MODEL_ID": "amazon.nova-lite-v1:0",
            "AWS_REGION": "eu-central-1",
            "GROCERY_AI_TIMEOUT": "5",
        }
    )
    assert settings.db_path == "/tmp/g.db"
    assert settings.ai_provider == "bedrock"
    assert settings.openai_api_key is None
    assert settings.bedrock_model_id == "amazon.nova-lite-v1:0"
    assert settings.aws_region == "eu-central-1"
    assert settings.ai_timeout == 5.0


def test_reads_os_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
    settings = Settings.from_env()
    assert settings.openai_api_key == "sk-test"
    assert settings.openai_model == "gpt-test"


def test_unknown_provider_is_rejected():
    with pytest.raises(ValueError, match="Unknown AI provider"):
        Settings.from_env({"GROCERY_AI_PROVIDER": "llama"})
