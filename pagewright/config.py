import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from .errors import MalformedDescriptor

DEFAULT_CONFIG_NAME = "config.yml"

# Keys that configure the build itself rather than describe the site
BUILD_KEYS = ("pages_dir", "dist_dir", "template", "workers")


@dataclass(frozen=True)
class SiteConfig:
    """Everything a build needs that is shared by all pages. Never mutated."""

    template: str
    pages_dir: Path
    dist_dir: Path
    settings: Mapping = field(default_factory=lambda: MappingProxyType({}))
    workers: int = 1

    @property
    def site(self) -> str:
        return self.settings.get("site") or ""


def get_config_path_from_args(argv=None) -> Path:
    """
    Determine which config file to use.

    - If a path is passed as first argument, use that.
    - Otherwise, assume ./config.yml.
    """
    argv = sys.argv[1:] if argv is None else argv
    if argv:
        return Path(argv[0]).resolve()
    return (Path.cwd() / DEFAULT_CONFIG_NAME).resolve()


def read_yaml(path: Path):
    """Load a YAML document; an empty file is an empty mapping."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        # ValueError: YAML-native dates that do not exist (published: 2021-02-30)
        raise MalformedDescriptor(f"cannot read: {exc}", path) from exc
    return {} if data is None else data


def read_descriptor(path: Path) -> dict:
    data = read_yaml(path)
    if not isinstance(data, dict):
        raise MalformedDescriptor(
            f"expected a mapping at top level, got {type(data).__name__}", path
        )
    return data


def load_config(config_path: Path) -> SiteConfig:
    """Load YAML config, apply defaults and read the master template."""
    config_path = Path(config_path)
    if not config_path.exists():
        raise MalformedDescriptor("config file not found", config_path)

    data = read_descriptor(config_path)
    base_dir = config_path.parent

    pages_dir = (base_dir / data.get("pages_dir", "pages")).resolve()
    dist_dir = (base_dir / data.get("dist_dir", "dist")).resolve()
    template_path = (base_dir / data.get("template", "template.html")).resolve()

    try:
        workers = max(1, int(data.get("workers", 1)))
    except (TypeError, ValueError) as exc:
        raise MalformedDescriptor(f"workers must be an integer: {exc}", config_path) from exc

    if not pages_dir.is_dir():
        raise MalformedDescriptor(f"pages directory not found: {pages_dir}", config_path)

    try:
        template = template_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MalformedDescriptor(f"cannot read template {template_path}: {exc}", config_path) from exc

    settings = {k: v for k, v in data.items() if k not in BUILD_KEYS}
    settings.setdefault("site", "")

    return SiteConfig(
        template=template,
        pages_dir=pages_dir,
        dist_dir=dist_dir,
        settings=MappingProxyType(settings),
        workers=workers,
    )
