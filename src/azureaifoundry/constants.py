"""Project-wide constants for the Azure AI Foundry plugin."""

# ==============================================================================
# Provider identity
# ==============================================================================

PROVIDER = "azureaifoundry"

DEFAULT_API_VERSION = "2025-03-01-preview"

# Entra ID scope for Azure OpenAI / Foundry resources
COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"

# ==============================================================================
# Well-known deployment names
# ==============================================================================

# Image generation
MODEL_DALL_E_2 = "dall-e-2"
MODEL_DALL_E_3 = "dall-e-3"
MODEL_GPT_IMAGE_1 = "gpt-image-1"

# Text-to-speech
MODEL_TTS_1 = "tts-1"
MODEL_TTS_1_HD = "tts-1-hd"
MODEL_GPT_4O_MINI_TTS = "gpt-4o-mini-tts"

# Speech-to-text
MODEL_WHISPER_1 = "whisper-1"
MODEL_GPT_4O_MINI_TRANSCRIBE = "gpt-4o-mini-transcribe"
MODEL_GPT_4O_TRANSCRIBE = "gpt-4o-transcribe"
MODEL_GPT_4O_TRANSCRIBE_DIARIZE = "gpt-4o-transcribe-diarize"

# Chat models registered by define_common_models: (name, supports_media)
COMMON_CHAT_MODELS: tuple[tuple[str, bool], ...] = (
    ("gpt-5", True),
    ("gpt-5-mini", True),
    ("gpt-4o", True),
    ("gpt-4o-mini", True),
    ("gpt-4-turbo", True),
    ("gpt-4", False),
    ("gpt-35-turbo", False),
)

COMMON_EMBEDDING_MODELS: tuple[str, ...] = (
    "text-embedding-ada-002",
    "text-embedding-3-small",
    "text-embedding-3-large",
)
