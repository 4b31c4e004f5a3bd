"""
Settings loader.

Reads the packaged defaults.yaml with OmegaConf, merges an optional user
config file on top, then applies environment overrides loaded from .env.

Examples:
    >>> settings = load_settings()
    >>> settings["llm"]["provider"]
    'openai'

    >>> # User file overrides packaged defaults, env overrides both
    >>> settings = load_settings(Path("lumina.yaml"))
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
DEFAULTS_PATH = CONFIG_DIR / "defaults.yaml"
SAMPLE_DOCUMENT_PATH = CONFIG_DIR / "sample_cv.yaml"

# Environment variable -> (section, key, cast)
ENV_OVERRIDES = {
    "LLM_PROVIDER": ("llm", "provider", str.lower),
    "LLM_MODEL": ("llm", "model", str),
    "LLM_TEMPERATURE": ("llm", "temperature", float),
    "LLM_MAX_TOKENS": ("llm", "max_tokens", int),
    "LUMINA_LOGS_PATH": ("paths", "logs", str),
}


def load_settings(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load application settings.

    Args:
        config_path: Optional YAML file merged over the defaults. Falls back to
            the LUMINA_CONFIG environment variable when not given.

    Returns:
        Plain dict with "llm", "assistant" and "paths" sections

    Raises:
        FileNotFoundError: If an explicit config file does not exist
        ValueError: If an environment override cannot be cast
    """
    config = OmegaConf.load(DEFAULTS_PATH)

    if config_path is None and os.getenv("LUMINA_CONFIG"):
        config_path = Path(os.getenv("LUMINA_CONFIG"))

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config = OmegaConf.merge(config, OmegaConf.load(config_path))

    settings = OmegaConf.to_container(config, resolve=True)

    for env_var, (section, key, cast) in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            try:
                settings[section][key] = cast(value)
            except ValueError:
                raise ValueError(f"Invalid value for {env_var}: {value!r}")

    if not settings["paths"].get("sample_document"):
        settings["paths"]["sample_document"] = str(SAMPLE_DOCUMENT_PATH)

    return settings
