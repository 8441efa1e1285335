import shutil
import sys
from pathlib import Path

from .errors import MissingRequiredFile, OutputWriteFailure
from .paths import relative_path


def wipe_dir(directory: Path):
    """Delete the contents of a directory, but not the directory itself."""
    directory = Path(directory)
    if not directory.exists():
        directory.mkdir(parents=True)
        return
    for child in directory.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def copy_dir(src: Path, dest: Path):
    """Copy the contents of one directory into another, merging with what is there."""
    shutil.copytree(src, dest, dirs_exist_ok=True)


def write_page(page):
    """Write the rendered page to its output path, creating parent dirs."""
    out_path = Path(page.output_path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(page.final_page, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteFailure(f"cannot write {out_path}: {exc}") from exc
    print(f"Wrote {out_path}")


def copy_required_files(page) -> list:
    """
    Copy the files a page requires from beside its descriptor to beside its
    output file. Directories are copied recursively.

    Returns a MissingRequiredFile for every entry that did not exist; those
    do not stop the other copies.
    """
    problems = []
    for name in page.requires:
        src = relative_path(page.input_path, name)
        dest = relative_path(page.output_path, name)
        if not src.exists():
            problems.append(MissingRequiredFile(src, page.input_path))
            continue
        try:
            if src.is_dir():
                copy_dir(src, dest)
            else:
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src, dest)
        except OSError as exc:
            raise OutputWriteFailure(f"cannot copy {src} to {dest}: {exc}") from exc
        print(f"Copied {src} to {dest}")
    return problems


def generate_pages(pages, dist_dir: Path) -> list:
    """
    Wipe dist_dir, then write every page and its required files.

    The wipe finishes before the first write. Returns the side-file problems,
    which are also printed as warnings.
    """
    wipe_dir(dist_dir)
    problems = []
    for page in pages:
        write_page(page)
        for problem in copy_required_files(page):
            print(f"WARNING: {problem}", file=sys.stderr)
            problems.append(problem)
    return problems
