from pathlib import Path
from types import MappingProxyType

import pytest
import yaml

from pagewright.config import SiteConfig

TEMPLATE = """<html><head><title>{{page-title}}</title>{{redirect}}{{head}}</head>
<body>{{breadcrumbs}}{{intro}}<main>{{content}}</main></body></html>"""


@pytest.fixture
def site_dirs(tmp_path):
    pages = tmp_path / "pages"
    dist = tmp_path / "dist"
    pages.mkdir()
    return pages, dist


@pytest.fixture
def make_site(site_dirs):
    """Build a SiteConfig over tmp dirs; pass template/settings to override."""
    pages, dist = site_dirs

    def _make(template=TEMPLATE, workers=1, **settings):
        settings.setdefault("site", "Test Site")
        return SiteConfig(
            template=template,
            pages_dir=pages,
            dist_dir=dist,
            settings=MappingProxyType(settings),
            workers=workers,
        )

    return _make


@pytest.fixture
def write_page(site_dirs):
    """Write a descriptor (dict) or any text file under the pages dir."""
    pages, _ = site_dirs

    def _write(rel: str, data) -> Path:
        path = pages / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    return _write
