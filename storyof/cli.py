"""storyof: render markdown documents to standalone HTML pages."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from storyof.config import load_settings, settings_template_path
from storyof.constants import APP_CMD, APP_VERSION
from storyof.errors import EngineError
from storyof.logger import AgentLogger
from storyof.renderer import MarkdownRenderer, TemplateCache, default_template_candidates
from storyof.validation import build_fix_prompt, validate_html


def _build_template_cache(template_arg: str | None) -> TemplateCache:
    """Explicit --template wins; otherwise env, settings file, packaged asset."""
    if template_arg is not None:
        return TemplateCache([Path(template_arg).expanduser()])
    settings_path = settings_template_path(load_settings())
    preferred = [settings_path] if settings_path is not None else None
    return TemplateCache(default_template_candidates(preferred))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog=APP_CMD,
        description="Render markdown documents to HTML pages with interactive Mermaid diagrams.",
    )
    parser.add_argument("paths", nargs="+", help="Markdown files to render (X.md -> X.html, X.body.html).")
    parser.add_argument(
        "--template",
        default=None,
        help="Template file with {{TITLE}} and {{CONTENT}} placeholders (default: packaged template.html).",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate Mermaid diagrams with mermaid-cli after rendering.",
    )
    parser.add_argument("--log-file", default=None, help="Append a render log to this file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    args = parser.parse_args(argv)

    logger = AgentLogger(args.log_file)
    renderer = MarkdownRenderer(_build_template_cache(args.template))

    exit_code = 0
    for raw_path in args.paths:
        md_path = Path(raw_path).expanduser()
        if not md_path.is_file():
            print(f"Path does not exist: {md_path}", file=sys.stderr)
            return 2

        logger.log(f"Markdown document detected: {md_path}")
        try:
            html_path = renderer.render_document(md_path)
        except (OSError, ValueError, EngineError) as exc:
            logger.log(f"Render error: {exc}")
            print(f"Render failed for {md_path}: {exc}", file=sys.stderr)
            exit_code = 1
            continue
        print(html_path)

        if not args.validate:
            continue
        result = validate_html(html_path)
        logger.log(f"Validated {result.total} diagram(s) in {html_path}: {len(result.errors)} error(s)")
        if not result.ok:
            print(build_fix_prompt(result.errors, md_path), file=sys.stderr)
            exit_code = 1

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
