from reverie.libs.schemas import get_settings


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("REVERIE_APP_NAME", "TestReverie")
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
    monkeypatch.setenv("REVERIE_ML_DEVICE", "cpu")
    monkeypatch.setenv("REVERIE_CHAT_MODEL_ID", "ollama-llama2")
    get_settings.cache_clear()
    try:
        settings = get_settings()
    finally:
        get_settings.cache_clear()

    assert settings.app_name == "TestReverie"
    assert settings.ollama_base_url == "http://gpu-box:11434"
    assert settings.ml_device == "cpu"
    assert settings.chat_model_id == "ollama-llama2"
    assert settings.summary_model_id == "ollama-summarize"
    assert settings.remote_timeout == 60.0
