import os

from dotenv import load_dotenv

load_dotenv()

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")

# LLM configuration
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()
LLM_MODEL = os.getenv("LLM_MODEL", "")
# OpenAI-compatible endpoint (self-hosted vLLM etc.); empty means api.openai.com
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))

# Batch simulation
BATCH_SIZE = int(os.getenv("BATCH_SIZE", "5"))
MAX_BATCH_SIZE = int(os.getenv("MAX_BATCH_SIZE", "20"))


def api_key_for(provider: str) -> str:
    """Return the configured credential for a provider, or "" if unset."""
    if provider == "anthropic":
        return ANTHROPIC_API_KEY
    return OPENAI_API_KEY
