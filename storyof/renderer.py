"""Markdown -> HTML document rendering with Mermaid diagram containers."""

from __future__ import annotations

import html
import json
import os
import re
from pathlib import Path
from typing import Callable, Protocol

from markdown_it import MarkdownIt
from markdown_it.common.utils import unescapeAll
from mdit_py_plugins.tasklists import tasklists_plugin

from storyof.constants import (
    CONTENT_PLACEHOLDER,
    FALLBACK_TITLE,
    TEMPLATE_ENV_VAR,
    TEMPLATE_FILE_NAME,
    TITLE_PLACEHOLDER,
)
from storyof.errors import EngineAssetNotFoundError

TITLE_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)

# Mermaid styling directives; matched against the stripped line.
MERMAID_STYLE_PATTERNS = (
    re.compile(r"style\s+\S+\s+"),
    re.compile(r"%%\{init:"),
    re.compile(r"classDef\s+"),
    re.compile(r"class\s+\S+\s+\S+$"),
)


def default_template_candidates(preferred: list[Path] | None = None) -> list[Path]:
    """Ordered template.html locations: env override, preferred, package assets, cwd."""
    candidates: list[Path] = []
    env_value = os.environ.get(TEMPLATE_ENV_VAR, "").strip()
    if env_value:
        candidates.append(Path(env_value).expanduser())
    if preferred:
        candidates.extend(preferred)

    app_dir = Path(__file__).resolve().parent
    candidates.extend(
        [
            app_dir.parent / "assets" / TEMPLATE_FILE_NAME,
            app_dir / "assets" / TEMPLATE_FILE_NAME,
            Path.cwd() / "assets" / TEMPLATE_FILE_NAME,
        ]
    )
    return candidates


class TemplateCache:
    """Holds template.html in memory until explicitly invalidated."""

    def __init__(self, candidates: list[Path] | None = None) -> None:
        self._candidates = [Path(p) for p in candidates] if candidates is not None else None
        self._template: str | None = None
        self.path: Path | None = None

    def candidates(self) -> list[Path]:
        if self._candidates is not None:
            return list(self._candidates)
        return default_template_candidates()

    def resolve_path(self) -> Path:
        for candidate in self.candidates():
            try:
                if candidate.is_file():
                    return candidate.resolve()
            except OSError:
                continue
        raise EngineAssetNotFoundError(TEMPLATE_FILE_NAME)

    def get(self) -> str:
        if self._template is None:
            path = self.resolve_path()
            self._template = path.read_text(encoding="utf-8")
            self.path = path
        return self._template

    def invalidate(self) -> None:
        """Forget the cached template; the next get() re-reads from disk."""
        self._template = None
        self.path = None


def clean_mermaid_source(code: str) -> str:
    """Strip style/init/classDef/class directives from a Mermaid block."""
    kept = [
        line
        for line in code.split("\n")
        if not any(pattern.match(line.strip()) for pattern in MERMAID_STYLE_PATTERNS)
    ]
    return "\n".join(kept).strip()


def extract_title(markdown_text: str) -> str:
    """Text of the first level-1 heading, or the fallback title."""
    match = TITLE_PATTERN.search(markdown_text)
    if match is None:
        return FALLBACK_TITLE
    return match.group(1).strip()


def fill_template(template: str, title: str, body: str) -> str:
    """Substitute the title and content placeholders once each.

    Both positions are located in the original template, so placeholder text
    inside the title or body is never substituted.
    """
    replacements = []
    for token, value in ((TITLE_PLACEHOLDER, title.replace("<", "&lt;")), (CONTENT_PLACEHOLDER, body)):
        index = template.find(token)
        if index != -1:
            replacements.append((index, token, value))

    parts: list[str] = []
    cursor = 0
    for index, token, value in sorted(replacements):
        parts.append(template[cursor:index])
        parts.append(value)
        cursor = index + len(token)
    parts.append(template[cursor:])
    return "".join(parts)


def _output_paths(md_path: Path) -> tuple[Path, Path]:
    if md_path.suffix != ".md":
        raise ValueError(f"Not a markdown file: {md_path}")
    return md_path.with_name(md_path.stem + ".html"), md_path.with_name(md_path.stem + ".body.html")


class CodeBlockRenderer(Protocol):
    """Strategy for fenced code blocks; ``default`` yields the engine's HTML."""

    def render_code_block(self, lang: str, text: str, default: Callable[[], str]) -> str: ...


class MermaidCodeBlockRenderer:
    """Turns ```mermaid fences into zoomable diagram containers."""

    def render_code_block(self, lang: str, text: str, default: Callable[[], str]) -> str:
        if lang != "mermaid":
            return default()
        source = html.escape(clean_mermaid_source(text), quote=False)
        return (
            '<div class="mermaid-box">\n'
            '  <div class="controls">\n'
            '    <button class="zoom-in">+</button>\n'
            '    <button class="zoom-out">&minus;</button>\n'
            '    <button class="zoom-reset">Reset</button>\n'
            "  </div>\n"
            '  <div class="pan-area">\n'
            f'    <div class="mermaid">{source}</div>\n'
            "  </div>\n"
            "</div>\n"
        )


class MarkdownRenderer:
    """Renders markdown files into template-wrapped HTML plus a body fragment."""

    def __init__(
        self,
        template_cache: TemplateCache | None = None,
        code_blocks: CodeBlockRenderer | None = None,
    ) -> None:
        self.template_cache = template_cache if template_cache is not None else TemplateCache()
        self._code_blocks = code_blocks if code_blocks is not None else MermaidCodeBlockRenderer()
        self._md: MarkdownIt | None = None

    def _engine(self) -> MarkdownIt:
        if self._md is not None:
            return self._md

        md = (
            MarkdownIt("commonmark", {"html": True, "linkify": True})
            .enable("linkify")
            .enable("table")
            .enable("strikethrough")
        )
        md.use(tasklists_plugin)
        default_fence = md.renderer.rules["fence"]
        code_blocks = self._code_blocks

        def custom_fence(tokens, idx, options, env):
            token = tokens[idx]
            info = unescapeAll(token.info).strip() if token.info else ""
            lang = info.split(maxsplit=1)[0] if info else ""
            return code_blocks.render_code_block(
                lang,
                token.content,
                lambda: default_fence(tokens, idx, options, env),
            )

        md.renderer.rules["fence"] = custom_fence
        self._md = md
        return md

    def render_markdown(self, markdown_text: str) -> tuple[str, str]:
        """Return ``(title, body_html)`` for markdown text."""
        title = extract_title(markdown_text)
        body = self._engine().render(markdown_text)
        return title, body

    def render_document(self, md_path: str | Path) -> Path:
        """Write ``X.html`` and ``X.body.html`` next to ``X.md``; return the page path."""
        md_path = Path(md_path)
        html_path, body_path = _output_paths(md_path)
        markdown_text = md_path.read_text(encoding="utf-8")

        title, body = self.render_markdown(markdown_text)
        document = fill_template(self.template_cache.get(), title, body)

        # The two writes are independent; a failure in between leaves the
        # page newer than its fragment.
        html_path.write_text(document, encoding="utf-8")
        payload = json.dumps({"title": title, "body": body}, separators=(",", ":"), ensure_ascii=False)
        body_path.write_text(payload, encoding="utf-8")
        return html_path

    def assemble_document(self, html_path: str | Path) -> str:
        """Rebuild a page from its persisted fragment and the current template."""
        html_path = Path(html_path)
        if not html_path.name.endswith(".html"):
            raise ValueError(f"Not an html file: {html_path}")
        body_path = html_path.with_name(html_path.name[: -len(".html")] + ".body.html")
        payload = json.loads(body_path.read_text(encoding="utf-8"))
        title = payload.get("title") or FALLBACK_TITLE
        return fill_template(self.template_cache.get(), title, payload.get("body", ""))


_default_template_cache = TemplateCache()
_default_renderer: MarkdownRenderer | None = None


def get_template() -> str:
    return _default_template_cache.get()


def clear_template_cache() -> None:
    """Clear the process-wide template cache."""
    _default_template_cache.invalidate()


def render_document(md_path: str | Path) -> Path:
    """Render with the process-wide template cache."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = MarkdownRenderer(_default_template_cache)
    return _default_renderer.render_document(md_path)
