"""
The page record threaded through the build stages.

A record starts as descriptor + site settings + derived paths and every stage
returns a new, further enriched copy (dataclasses.replace). Descriptor keys
that are not recognised land in `extra` and stay available to placeholders.
"""
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .dates import raw_date
from .errors import MalformedDescriptor
from .paths import output_path

# Authored key -> attribute name
DESCRIPTOR_KEYS = {
    "title": "title",
    "subtitle": "subtitle",
    "author": "author",
    "page-title": "page_title",
    "content": "content",
    "published": "published",
    "updated": "updated",
    "keywords": "keywords",
    "redirect": "redirect",
    "head": "head",
    "requires": "requires",
    "misc?": "misc",
}

DERIVED_KEYS = {
    "input-path": "input_path",
    "output-path": "output_path",
    "breadcrumbs": "breadcrumbs",
    "intro": "intro",
    "final-page": "final_page",
}

RECORD_KEYS = {**DESCRIPTOR_KEYS, **DERIVED_KEYS}


@dataclass(frozen=True)
class PageRecord:
    input_path: Path
    output_path: Path
    settings: Mapping = field(default_factory=lambda: MappingProxyType({}))

    title: Optional[str] = None
    subtitle: Optional[str] = None
    author: Optional[str] = None
    page_title: Optional[str] = None
    content: Any = None
    published: Optional[str] = None
    updated: Optional[str] = None
    keywords: Any = None
    redirect: Optional[str] = None
    head: Any = None
    requires: tuple = ()
    misc: bool = False

    breadcrumbs: Optional[str] = None
    intro: Optional[str] = None
    final_page: Optional[str] = None

    extra: Mapping = field(default_factory=lambda: MappingProxyType({}))

    def evolve(self, **changes) -> "PageRecord":
        return replace(self, **changes)

    def lookup(self) -> dict:
        """
        The placeholder table for this page.

        Site settings first, then every record field that has a value, then
        unrecognised descriptor keys. Record fields without a value are still
        defined (as None, rendered empty) unless a setting provides one.
        """
        table = dict(self.settings)
        for key, attr in RECORD_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                table[key] = value
            else:
                table.setdefault(key, None)
        table.update(self.extra)
        return table


def _text(value):
    """YAML reads `title: 1984` as an int; page text fields are always strings."""
    return None if value is None else str(value)


def _str_list(value, key, path):
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise MalformedDescriptor(f"{key} must be a list of strings", path)
    return [str(v) for v in value]


def new_page(input_path: Path, descriptor: dict, site) -> PageRecord:
    """Merge a loaded descriptor with the site config into a fresh record."""
    input_path = Path(input_path)
    fields = {}
    extra = {}
    for key, value in descriptor.items():
        attr = DESCRIPTOR_KEYS.get(key)
        if attr is None:
            extra[key] = value
        else:
            fields[attr] = value

    for attr in ("title", "subtitle", "author", "page_title"):
        fields[attr] = _text(fields.get(attr))
    fields["published"] = raw_date(fields.get("published"))
    fields["updated"] = raw_date(fields.get("updated"))
    fields["keywords"] = _str_list(fields.get("keywords"), "keywords", input_path)
    fields["requires"] = tuple(_str_list(fields.get("requires"), "requires", input_path) or ())
    fields["misc"] = bool(fields.get("misc"))

    return PageRecord(
        input_path=input_path,
        output_path=output_path(input_path, site.pages_dir, site.dist_dir),
        settings=site.settings,
        extra=MappingProxyType(extra),
        **fields,
    )
