"""storyof: markdown document rendering and engine glue for the StoryOf agent CLI."""

from storyof.constants import APP_VERSION
from storyof.renderer import (
    MarkdownRenderer,
    TemplateCache,
    clean_mermaid_source,
    clear_template_cache,
    get_template,
    render_document,
)

__version__ = APP_VERSION

__all__ = [
    "MarkdownRenderer",
    "TemplateCache",
    "clean_mermaid_source",
    "clear_template_cache",
    "get_template",
    "render_document",
]
