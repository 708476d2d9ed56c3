"""Branding, paths, and environment-variable names shared across storyof."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "StoryOf"
APP_CMD = "storyof"
APP_VERSION = "0.4.0"

GLOBAL_DIR = Path.home() / ".storyof"
GLOBAL_SETTINGS_PATH = GLOBAL_DIR / "settings.json"

TEMPLATE_FILE_NAME = "template.html"
TEMPLATE_ENV_VAR = "STORYOF_TEMPLATE"
TITLE_PLACEHOLDER = "{{TITLE}}"
CONTENT_PLACEHOLDER = "{{CONTENT}}"
FALLBACK_TITLE = APP_NAME

MERMAID_CLI_VERSION = "11.4.2"
MERMAID_VALIDATION_TIMEOUT_SECONDS = 30
MERMAID_ERROR_MAX_CHARS = 500

# Storage lookup order used by the auth check.
PROVIDER_PRIORITY = (
    "anthropic",
    "openai",
    "google",
    "groq",
    "xai",
    "openrouter",
    "mistral",
    "cerebras",
    "github-copilot",
)

# provider -> (STORYOF_ variable, standard fallbacks). Declaration order is the
# environment lookup order.
ENV_VAR_MAP: dict[str, tuple[str, tuple[str, ...]]] = {
    "anthropic": ("STORYOF_ANTHROPIC_API_KEY", ("ANTHROPIC_API_KEY", "ANTHROPIC_OAUTH_TOKEN")),
    "openai": ("STORYOF_OPENAI_API_KEY", ("OPENAI_API_KEY",)),
    "google": ("STORYOF_GEMINI_API_KEY", ("GEMINI_API_KEY",)),
    "groq": ("STORYOF_GROQ_API_KEY", ("GROQ_API_KEY",)),
    "xai": ("STORYOF_XAI_API_KEY", ("XAI_API_KEY",)),
    "openrouter": ("STORYOF_OPENROUTER_API_KEY", ("OPENROUTER_API_KEY",)),
    "mistral": ("STORYOF_MISTRAL_API_KEY", ("MISTRAL_API_KEY",)),
    "cerebras": ("STORYOF_CEREBRAS_API_KEY", ("CEREBRAS_API_KEY",)),
    "github-copilot": ("STORYOF_GITHUB_TOKEN", ("COPILOT_GITHUB_TOKEN", "GH_TOKEN", "GITHUB_TOKEN")),
}
