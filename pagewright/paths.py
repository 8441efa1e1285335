import re
from pathlib import Path

DESCRIPTOR_SUFFIXES = (".yml", ".yaml")

# Matches "index.yml" or a bare ".yml" at the end of a relative page path
DESCRIPTOR_TAIL_RE = re.compile(r"(?:index)?\.ya?ml$", re.IGNORECASE)
FILE_EXT_RE = re.compile(r"^.*\.([\w_-]+)$")


def file_ext(path: Path):
    """Return the extension of a file without the dot, e.g. 'md'. None if there is none."""
    m = FILE_EXT_RE.match(Path(path).name)
    return m.group(1) if m else None


def is_descriptor(path: Path) -> bool:
    path = Path(path)
    return path.is_file() and path.suffix.lower() in DESCRIPTOR_SUFFIXES


def find_descriptors(pages_dir: Path) -> list:
    """Every page descriptor under pages_dir, in a stable order."""
    return sorted(p for p in Path(pages_dir).rglob("*") if is_descriptor(p))


def relative_path(origin: Path, target) -> Path:
    """
    Resolve `target` against `origin`.

    If origin is a file (or looks like one, i.e. has a suffix) the target is
    taken relative to the file's directory.
    """
    origin = Path(origin)
    base = origin.parent if origin.is_file() or origin.suffix else origin
    return base / target


def output_path(input_path: Path, pages_dir: Path, dist_dir: Path) -> Path:
    """
    Map a descriptor path to its output file:

      pages/blog/post.yml -> dist/blog/post.html

    Raises ValueError if input_path is not under pages_dir.
    """
    rel = Path(input_path).relative_to(pages_dir)
    return (Path(dist_dir) / rel).with_suffix(".html")


def page_path_segments(input_path: Path, pages_dir: Path):
    """
    Split a descriptor's position in the source tree into display segments.

      blog/2020/post.yml  -> ["blog", "2020", "post"]
      blog/my_notes/index.yml -> ["blog", "my notes"]
      index.yml           -> None

    None means the page is the site root, which has no breadcrumbs at all.
    """
    rel = Path(input_path).relative_to(pages_dir).as_posix()
    rel = DESCRIPTOR_TAIL_RE.sub("", rel, count=1)
    parts = rel.replace("_", " ").split("/")
    while parts and parts[-1] == "":
        parts.pop()
    if not parts or parts[0] == "":
        return None
    return parts


def page_depth(input_path: Path, pages_dir: Path) -> int:
    """How many directories the page's output file sits below the dist root."""
    return len(Path(input_path).relative_to(pages_dir).parent.parts)
