"""Configuration management for the ArchiGen studio."""

import os
from pathlib import Path
from typing import Dict, List, Optional
import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .errors import ConfigurationError
from .logger import get_logger
from ..models.schemas import CatalogEntry, Catalog

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_STUDIO_PATH = PACKAGE_DIR / "config" / "studio.yaml"
PROMPTS_DIR = PACKAGE_DIR / "prompts"


class ModelsConfig(BaseModel):
    """Gemini models used by the studio."""
    enhancement: str = "gemini-2.5-flash"
    transform: str = "gemini-2.5-flash-image"
    label: str = "Gemini 2.5 Flash Image"


class Config(BaseModel):
    """Main application configuration."""

    # API Keys
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )

    # Application Settings
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    timeout_gemini_seconds: float = Field(default=120.0, alias="TIMEOUT_GEMINI_SECONDS")
    session_ttl_seconds: int = Field(default=3600, alias="SESSION_TTL_SECONDS")
    max_upload_bytes: int = Field(default=20 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")

    # Studio catalog
    models: ModelsConfig = Field(default_factory=ModelsConfig)
    download_filename: str = "archigen-transform.png"
    presets: List[CatalogEntry] = []
    quick_edits: List[CatalogEntry] = []

    class Config:
        populate_by_name = True

    @property
    def has_credential(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    def catalog(self) -> Catalog:
        """Shortcuts and labels exposed to the page."""
        return Catalog(
            presets=self.presets,
            quick_edits=self.quick_edits,
            model_label=self.models.label,
            download_filename=self.download_filename,
        )


# Global config instance
_config: Optional[Config] = None


def load_config(studio_path: Optional[Path] = None) -> Config:
    """
    Load configuration from environment and the studio YAML file.

    Args:
        studio_path: Override for the studio YAML location

    Returns:
        Config instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config

    studio_path = Path(studio_path or os.getenv("ARCHIGEN_STUDIO_FILE", DEFAULT_STUDIO_PATH))

    try:
        if not studio_path.exists():
            raise ConfigurationError(f"studio.yaml not found at {studio_path}")

        with open(studio_path, "r", encoding="utf-8") as f:
            studio_config = yaml.safe_load(f) or {}

        # Environment wins over YAML for scalar settings
        config_data = {
            **studio_config,
            **os.environ,
        }

        _config = Config(**config_data)

        logger.info(
            "Configuration loaded successfully",
            extra={
                "presets_count": len(_config.presets),
                "quick_edits_count": len(_config.quick_edits),
                "environment": _config.app_env,
                "credential_configured": _config.has_credential,
            }
        )

        return _config

    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}")


def get_config() -> Config:
    """
    Get the current configuration instance.

    Raises:
        ConfigurationError: If config not loaded
    """
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


_prompt_cache: Dict[str, str] = {}


def load_prompt_template(name: str) -> str:
    """
    Load an instruction template from the prompts directory (cached).

    Args:
        name: Template name without extension (e.g. 'transform_edit')

    Returns:
        Template text with str.format placeholders

    Raises:
        ConfigurationError: If template file not found
    """
    if name in _prompt_cache:
        return _prompt_cache[name]

    prompt_path = PROMPTS_DIR / f"{name}.txt"

    if not prompt_path.exists():
        raise ConfigurationError(f"Prompt template not found: {prompt_path}")

    _prompt_cache[name] = prompt_path.read_text(encoding="utf-8").strip()
    return _prompt_cache[name]
