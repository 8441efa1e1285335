import sys

from .config import get_config_path_from_args, load_config
from .emit import generate_pages
from .errors import SiteBuildError
from .pipeline import build_pages


def build(config_path) -> int:
    """
    Build the whole site described by config_path.

    Returns the process exit code: 0 when every page was built, 1 otherwise.
    Pages that built are still written when others failed.
    """
    site = load_config(config_path)

    pages, failures = build_pages(site)
    for exc in failures:
        print(f"ERROR: {exc}", file=sys.stderr)

    problems = generate_pages(pages, site.dist_dir)

    summary = f"Built {len(pages)} page(s) into {site.dist_dir}"
    if failures:
        summary += f", {len(failures)} failed"
    if problems:
        summary += f", {len(problems)} missing required file(s)"
    print(summary)

    return 1 if failures else 0


def main(argv=None) -> int:
    config_path = get_config_path_from_args(argv)
    try:
        return build(config_path)
    except SiteBuildError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

