from .markup import render_markup

SEPARATOR = " &rsaquo; "


def interpose(separator, items):
    out = []
    for i, item in enumerate(items):
        if i:
            out.append(separator)
        out.append(item)
    return out


def home_href(depth: int) -> str:
    return "../" * depth if depth else "./"


def breadcrumb_tree(segments, *, misc: bool = False, depth: int = 0):
    """
    Markup tree for a page's breadcrumb trail, or None for the site root.

    For ["blog", "2020", "post"]:

      home > blog (../../) > 2020 (../) > post

    Every segment but the last links "../" repeated by its distance from the
    last segment; the last one is the current page and is plain text.
    """
    if segments is None:
        return None

    last = len(segments) - 1
    trail = []
    for idx, name in enumerate(segments):
        distance = last - idx
        if distance == 0:
            trail.append(name)
        else:
            trail.append(["a", {"href": "../" * distance}, name])

    return [
        "nav", {"class": "bread"},
        [
            "span",
            ["a", {"href": home_href(depth)}, "home"],
            SEPARATOR,
            f"misc{SEPARATOR}" if misc else None,
            *interpose(SEPARATOR, trail),
        ],
    ]


def breadcrumbs(segments, *, misc: bool = False, depth: int = 0):
    """Rendered breadcrumb HTML, or None when the page is the site root."""
    tree = breadcrumb_tree(segments, misc=misc, depth=depth)
    if tree is None:
        return None
    return render_markup(tree)
