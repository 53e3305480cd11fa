"""
Settings loading.

Values come from HTML_TRANSLATOR_* environment variables (a .env file is
loaded by run_translator.py via python-dotenv); anything unset keeps the
default declared on Settings.
"""

import os
from typing import Optional

from .schemas import Settings
from .logger import get_module_logger

logger = get_module_logger("config")

ENV_PREFIX = "HTML_TRANSLATOR_"

# Environment variable suffix -> Settings field
_ENV_FIELDS = {
    "API_URL": "api_url",
    "MODEL": "model",
    "TARGET_LANGUAGE": "target_language",
    "MAX_CHUNK_LENGTH": "max_chunk_length",
    "TEMPERATURE": "temperature",
}


def load_settings(environ: Optional[dict] = None, **overrides) -> Settings:
    """
    Build Settings from the environment plus explicit overrides.

    Explicit keyword overrides win over environment variables; None values
    are ignored so argparse defaults can be passed straight through.
    pydantic validates the result, so a non-numeric MAX_CHUNK_LENGTH fails
    here rather than deep inside the pipeline.
    """
    env = os.environ if environ is None else environ
    values = {}

    for suffix, field in _ENV_FIELDS.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is not None and raw.strip():
            values[field] = raw.strip()

    values.update({k: v for k, v in overrides.items() if v is not None})

    settings = Settings(**values)
    logger.debug(
        f"Settings loaded: model={settings.model}, api_url={settings.api_url}, "
        f"max_chunk_length={settings.max_chunk_length}"
    )
    return settings
