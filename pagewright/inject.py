import re

from .errors import MissingPlaceholder

# {{name}}, {{ page-title }}, {{  site_name  }}
PLACEHOLDER_RE = re.compile(r"\{\{\s*([\w-]+)\s*\}\}")


def stringify(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def inject(text: str, lookup, source=None) -> str:
    """
    Replace {{name}} tokens in text with lookup[name].

    One left-to-right pass: substituted values are never scanned again, so a
    value containing "{{x}}" is inserted literally. A name missing from lookup
    raises MissingPlaceholder; `source` (usually the page path) is attached to
    the error.
    """
    def replace(m):
        name = m.group(1)
        if name not in lookup:
            raise MissingPlaceholder(name, source)
        return stringify(lookup[name])

    return PLACEHOLDER_RE.sub(replace, text)
