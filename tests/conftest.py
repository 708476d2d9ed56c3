from pathlib import Path

import pytest

from storyof.renderer import MarkdownRenderer, TemplateCache

TEST_TEMPLATE = "<html><head><title>{{TITLE}}</title></head><body>{{CONTENT}}</body></html>"


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    path = tmp_path / "template.html"
    path.write_text(TEST_TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def template_cache(template_path: Path) -> TemplateCache:
    return TemplateCache([template_path])


@pytest.fixture
def renderer(template_cache: TemplateCache) -> MarkdownRenderer:
    return MarkdownRenderer(template_cache)
