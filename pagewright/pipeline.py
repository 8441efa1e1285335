"""
The page build pipeline.

Each stage is a pure function (page, site) -> page that fills in one part of
the page record. Stages declare the derived fields they read and write, and
check_stage_order() rejects any composition in which a field is read before
every stage writing it has run.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .breadcrumbs import breadcrumbs
from .config import SiteConfig, read_descriptor
from .dates import InvalidDate, date_block
from .errors import MalformedDescriptor, MissingContentSource, PageError, PipelineOrderError
from .inject import inject
from .markup import is_tag_name, render_markdown, render_markup
from .page import PageRecord, new_page
from .paths import file_ext, find_descriptors, page_depth, page_path_segments, relative_path

MARKDOWN_EXTS = {"md", "markdown"}


@dataclass(frozen=True)
class Stage:
    name: str
    func: Callable
    reads: frozenset = frozenset()
    writes: frozenset = frozenset()

    def __call__(self, page: PageRecord, site: SiteConfig) -> PageRecord:
        return self.func(page, site)


def stage(name, reads=(), writes=()):
    def wrap(func):
        return Stage(name, func, frozenset(reads), frozenset(writes))
    return wrap


def check_stage_order(stages) -> None:
    """
    Raise PipelineOrderError unless every field a stage reads is written only
    by stages that come before it.
    """
    for i, reader in enumerate(stages):
        for j, writer in enumerate(stages):
            if j <= i:
                continue
            clash = reader.reads & writer.writes
            if clash:
                raise PipelineOrderError(
                    f"stage {reader.name!r} reads {sorted(clash)} "
                    f"before stage {writer.name!r} writes it"
                )


# -----------------------
# Stages
# -----------------------

@stage("redirect", writes={"redirect"})
def attach_redirect(page, site):
    if not page.redirect:
        return page
    meta = ["meta", {"http-equiv": "refresh", "content": f"0; url={page.redirect}"}]
    return page.evolve(redirect=render_markup(meta))


@stage("head", writes={"head"})
def attach_extra_head_tags(page, site):
    head = page.head
    if not head:
        return page
    # A single tag is ["meta", {...}]; a sequence is [["meta", ...], "<link ...>", ...]
    if isinstance(head, str) or is_tag_name(head[0]):
        head = [head]
    try:
        html = "\n".join(render_markup(tag) for tag in head)
    except TypeError as exc:
        raise MalformedDescriptor(f"head: {exc}", page.input_path) from exc
    return page.evolve(head=html)


@stage("keywords", writes={"keywords"})
def attach_keywords(page, site):
    keywords = page.keywords or []
    return page.evolve(keywords=", ".join(keywords))


@stage("content", writes={"content"})
def attach_content(page, site):
    """
    Resolve the page body to HTML.

    A string names a file next to the descriptor: Markdown (.md) is rendered,
    anything else is used as-is. Anything other than a string is an inline
    markup tree. No content at all gives an empty body.
    """
    content = page.content
    if content is None:
        return page.evolve(content="")

    if isinstance(content, str):
        source = relative_path(page.input_path, content)
        try:
            text = source.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise MissingContentSource(source, page.input_path) from exc
        except UnicodeDecodeError as exc:
            raise MalformedDescriptor(f"content file {source} is not UTF-8: {exc}", page.input_path) from exc
        except OSError as exc:
            raise MalformedDescriptor(f"cannot read content file {source}: {exc}", page.input_path) from exc
        if file_ext(source) in MARKDOWN_EXTS:
            text = render_markdown(text)
        return page.evolve(content=text)

    try:
        html = render_markup(content)
    except TypeError as exc:
        raise MalformedDescriptor(f"content: {exc}", page.input_path) from exc
    return page.evolve(content=html)


@stage("breadcrumbs", writes={"breadcrumbs"})
def attach_breadcrumbs(page, site):
    segments = page_path_segments(page.input_path, site.pages_dir)
    depth = page_depth(page.input_path, site.pages_dir)
    return page.evolve(breadcrumbs=breadcrumbs(segments, misc=page.misc, depth=depth))


@stage("intro", writes={"intro"})
def attach_intro(page, site):
    """Build the intro/header block: title, optional subtitle and date."""
    if not page.title:
        return page.evolve(intro=None)
    try:
        when = date_block(page.published, page.updated)
    except InvalidDate as exc:
        raise InvalidDate(exc.value, page.input_path) from exc
    intro = [
        "div", {"class": "intro"},
        ["h1", page.title],
        ["h2", page.subtitle] if page.subtitle else None,
        when,
    ]
    return page.evolve(intro=render_markup(intro))


@stage("page-title", writes={"page-title"})
def attach_page_title(page, site):
    if page.page_title:
        title = page.page_title
    elif page.title:
        title = page.title
        if page.subtitle:
            title += f": {page.subtitle}"
        title += f" | {site.site}"
    else:
        title = site.site
    return page.evolve(page_title=title)


@stage(
    "inline",
    reads={"content", "redirect", "head", "keywords", "breadcrumbs", "intro", "page-title"},
    writes={"content"},
)
def inject_content(page, site):
    """Let a page refer to its own fields, e.g. {{title}}, inside its body."""
    return page.evolve(content=inject(page.content, page.lookup(), page.input_path))


@stage(
    "template",
    reads={"content", "redirect", "head", "keywords", "breadcrumbs", "intro", "page-title"},
    writes={"final-page"},
)
def inject_template(page, site):
    return page.evolve(final_page=inject(site.template, page.lookup(), page.input_path))


STAGES = (
    attach_redirect,
    attach_extra_head_tags,
    attach_keywords,
    attach_content,
    attach_breadcrumbs,
    attach_intro,
    attach_page_title,
    inject_content,
    inject_template,
)

check_stage_order(STAGES)


# -----------------------
# Running the pipeline
# -----------------------

def run_stages(page: PageRecord, site: SiteConfig, stages=STAGES) -> PageRecord:
    for s in stages:
        page = s(page, site)
    return page


def build_page(input_path: Path, site: SiteConfig) -> PageRecord:
    """Load one descriptor and run it through every stage."""
    page = new_page(input_path, read_descriptor(input_path), site)
    return run_stages(page, site)


def build_pages(site: SiteConfig, paths=None):
    """
    Build every page under site.pages_dir.

    Returns (pages, failures). A PageError stops only the page it came from;
    it is collected so the caller can report all of them.
    """
    if paths is None:
        paths = find_descriptors(site.pages_dir)

    def attempt(path):
        try:
            return build_page(path, site), None
        except PageError as exc:
            return None, exc

    if site.workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=site.workers) as executor:
            results = list(executor.map(attempt, paths))
    else:
        results = [attempt(p) for p in paths]

    pages = [page for page, _ in results if page is not None]
    failures = [exc for _, exc in results if exc is not None]
    return pages, failures
