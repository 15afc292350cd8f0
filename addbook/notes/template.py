"""
Note Template

Renders a BookRecord into note text by substituting {{placeholder}}
markers. The default template is a YAML front-matter block whose values
sit in double quotes, so values are escaped for that context by default.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from ..models import BookRecord

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = """---
title: "{{title}}"
author: "{{author}}"
translator: "{{translator}}"
pages: {{pages}}
cover: "{{cover}}"
publisher: "{{publisher}}"
datepublished: "{{datepublished}}"
ISBN: "{{ISBN}}"
url: "{{url}}"
language: "{{language}}"
description: "{{description}}"
summary: "{{summary}}"
---

"""

PLACEHOLDER_PATTERN = re.compile(r'\{\{\s*([A-Za-z_]+)\s*\}\}')


def escape_value(value: str) -> str:
    """
    Escape a value for a double-quoted YAML scalar.

    Backslashes and quotes are escaped, newlines become the two-character
    sequence \\n and carriage returns are dropped.
    """
    if not value:
        return ""
    return (
        value.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\r', '')
        .replace('\n', '\\n')
    )


def render_note(template: str, record: BookRecord, escape: bool = True) -> str:
    """
    Fill every known placeholder in template with the record's values.

    Args:
        template: Template text containing {{name}} placeholders
        record: Book record to render
        escape: Escape values for double-quoted front matter

    Returns:
        Rendered note text. Unknown placeholders are left as they are.
    """
    values = record.as_template_values()
    unknown = set()

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name not in values:
            unknown.add(name)
            return match.group(0)
        return escape_value(values[name]) if escape else values[name]

    content = PLACEHOLDER_PATTERN.sub(substitute, template)
    if unknown:
        logger.warning("Unknown template placeholders left as-is: %s", ", ".join(sorted(unknown)))
    return content


def load_template(path: Optional[str | Path]) -> str:
    """
    Read a template file, falling back to DEFAULT_TEMPLATE.

    An empty path, a missing file or an empty file all give the default.
    """
    if not path:
        return DEFAULT_TEMPLATE

    template_path = Path(path)
    if not template_path.is_file():
        logger.warning("Template not found: %s. Using default.", template_path)
        return DEFAULT_TEMPLATE

    content = template_path.read_text(encoding='utf-8')
    if not content.strip():
        logger.warning("Template is empty: %s. Using default.", template_path)
        return DEFAULT_TEMPLATE
    return content
