from sitegen.config import Settings


def test_defaults(monkeypatch):
    for name in ("GEMINI_API_KEY", "GEMINI_MODEL", "PORT", "SITEGEN_DEBUG", "SITEGEN_PROJECT_TTL",
                 "SITEGEN_PROJECTS_DIR", "GEMINI_TEMPERATURE", "SITEGEN_HOST", "AI_BACKEND_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.gemini_api_key is None
    assert s.port == 5000
    assert s.projects_dir == "./projects"
    assert s.debug is False
    assert s.project_ttl_seconds == 0


def test_from_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash-lite")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SITEGEN_DEBUG", "true")
    monkeypatch.setenv("SITEGEN_PROJECT_TTL", "3600")
    s = Settings.from_env()
    assert s.gemini_api_key == "k"
    assert s.gemini_model == "gemini-2.5-flash-lite"
    assert s.port == 8080
    assert s.debug is True
    assert s.project_ttl_seconds == 3600
