"""Mermaid diagram validation for rendered documents.

Diagram sources are pulled back out of the rendered HTML and checked one by
one with mermaid-cli, so the agent can be asked to fix broken diagrams.
"""

from __future__ import annotations

import html
import re
import shutil
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from storyof.constants import (
    MERMAID_CLI_VERSION,
    MERMAID_ERROR_MAX_CHARS,
    MERMAID_VALIDATION_TIMEOUT_SECONDS,
)

MERMAID_BLOCK_PATTERN = re.compile(
    r'<(?:pre|div)\s+class="mermaid"[^>]*>(.*?)</(?:pre|div)>',
    re.IGNORECASE | re.DOTALL,
)

ProgressCallback = Callable[[int, int, str, str | None], None]


@dataclass(frozen=True)
class MermaidBlock:
    index: int
    code: str


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    errors: list[str] = field(default_factory=list)
    total: int = 0


def extract_mermaid_blocks(html_text: str) -> list[MermaidBlock]:
    """Return the non-empty Mermaid sources found in rendered HTML."""
    blocks: list[MermaidBlock] = []
    for match in MERMAID_BLOCK_PATTERN.finditer(html_text):
        code = html.unescape(match.group(1)).strip()
        if code:
            blocks.append(MermaidBlock(index=len(blocks), code=code))
    return blocks


def _mermaid_cli_command(input_path: Path, output_path: Path) -> list[str]:
    return [
        "npx",
        "-y",
        f"@mermaid-js/mermaid-cli@{MERMAID_CLI_VERSION}",
        "-i",
        str(input_path),
        "-o",
        str(output_path),
        "--quiet",
    ]


def validate_mermaid_block(
    code: str, timeout: float = MERMAID_VALIDATION_TIMEOUT_SECONDS
) -> tuple[bool, str | None]:
    """Run mermaid-cli over one diagram; return ``(valid, error_message)``."""
    if shutil.which("npx") is None:
        return False, "npx not found in PATH; install Node.js to validate Mermaid diagrams"

    with tempfile.TemporaryDirectory(prefix="storyof-mermaid-") as tmp_dir:
        input_path = Path(tmp_dir) / "diagram.mmd"
        output_path = Path(tmp_dir) / "diagram.svg"
        input_path.write_text(code, encoding="utf-8")
        try:
            result = subprocess.run(
                _mermaid_cli_command(input_path, output_path),
                text=True,
                capture_output=True,
                check=False,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return False, "Mermaid validation timed out"
        except OSError as exc:
            return False, f"Mermaid validation failed: {exc}"

    output = ((result.stdout or "") + (result.stderr or "")).strip()
    if result.returncode != 0 or "error" in output.casefold():
        return False, output[:MERMAID_ERROR_MAX_CHARS] or "Unknown mermaid error"
    return True, None


def validate_html(html_path: str | Path, on_progress: ProgressCallback | None = None) -> ValidationResult:
    """Validate every Mermaid diagram in a rendered HTML file."""
    html_text = Path(html_path).read_text(encoding="utf-8")
    blocks = extract_mermaid_blocks(html_text)
    errors: list[str] = []

    for block in blocks:
        if on_progress is not None:
            on_progress(block.index, len(blocks), "checking", None)
        valid, error = validate_mermaid_block(block.code)
        if valid:
            if on_progress is not None:
                on_progress(block.index, len(blocks), "ok", None)
            continue
        errors.append(f"Diagram {block.index + 1}: {error}\nCode:\n{block.code[:300]}")
        if on_progress is not None:
            on_progress(block.index, len(blocks), "error", error)

    return ValidationResult(ok=not errors, errors=errors, total=len(blocks))


def build_fix_prompt(errors: list[str], md_path: str | Path) -> str:
    """Prompt asking the agent to repair the listed diagram errors."""
    joined = "\n\n---\n\n".join(errors)
    return f"""The document has {len(errors)} mermaid diagram error(s). Please fix them:

{joined}

Common fixes:
- Square brackets [] in sequence diagram messages trigger the "loop" keyword - use parentheses () instead
- Escape &, <, > as &amp; &lt; &gt;
- Use <br/> not \\n for line breaks
- Don't use backticks inside mermaid blocks
- Keep node IDs simple alphanumeric

Read the current markdown file, fix the broken diagrams, and write the corrected file back to: {md_path}"""
