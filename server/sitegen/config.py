# sitegen/config.py
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """
    Runtime configuration. Built once at startup and handed to the app factory,
    the model client and the project store; nothing reads os.environ after that.
    """
    gemini_api_key: Optional[str] = Field(None, description="Credential for the Gemini API")
    gemini_model: str = Field("gemini-2.5-flash", description="Gemini model name")
    gemini_temperature: float = Field(0.7, description="Sampling temperature")
    projects_dir: str = Field("./projects", description="Root directory holding one folder per project")
    host: str = Field("0.0.0.0")
    port: int = Field(5000)
    log_dir: str = Field("./ai_backend_logs", description="Where debug dumps of model calls go")
    debug: bool = Field(False)
    project_ttl_seconds: int = Field(0, description="Sweep projects older than this at startup; 0 disables")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gemini_api_key=os.environ.get("GEMINI_API_KEY") or None,
            gemini_model=os.environ.get("GEMINI_MODEL", "gemini-2.5-flash"),
            gemini_temperature=float(os.environ.get("GEMINI_TEMPERATURE", 0.7)),
            projects_dir=os.environ.get("SITEGEN_PROJECTS_DIR", "./projects"),
            host=os.environ.get("SITEGEN_HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", 5000)),
            log_dir=os.environ.get("AI_BACKEND_LOG_DIR", "./ai_backend_logs"),
            debug=_env_bool("SITEGEN_DEBUG"),
            project_ttl_seconds=int(os.environ.get("SITEGEN_PROJECT_TTL", 0)),
        )
