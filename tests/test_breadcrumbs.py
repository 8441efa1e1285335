"""Tests for the breadcrumb trail."""

from pagewright.breadcrumbs import breadcrumbs, home_href

SEP = " &rsaquo; "


class TestBreadcrumbs:
    def test_root_has_no_breadcrumbs(self):
        assert breadcrumbs(None) is None

    def test_nested_trail(self):
        html = breadcrumbs(["blog", "2020", "post"], depth=2)
        assert html == (
            '<nav class="bread"><span>'
            '<a href="../../">home</a>' + SEP
            + '<a href="../../">blog</a>' + SEP
            + '<a href="../">2020</a>' + SEP
            + "post"
            "</span></nav>"
        )

    def test_last_segment_not_linked(self):
        html = breadcrumbs(["blog", "post"], depth=1)
        assert html.endswith(SEP + "post</span></nav>")
        assert '<a href="../">blog</a>' in html

    def test_single_segment(self):
        html = breadcrumbs(["about"])
        assert html == '<nav class="bread"><span><a href="./">home</a>' + SEP + "about</span></nav>"

    def test_misc_inserted_after_home(self):
        html = breadcrumbs(["blog", "post"], misc=True, depth=1)
        assert '<a href="../">home</a>' + SEP + "misc" + SEP + '<a href="../">blog</a>' in html

    def test_spaces_in_segment(self):
        assert "my notes</span>" in breadcrumbs(["my notes"])


class TestHomeHref:
    def test_depths(self):
        assert home_href(0) == "./"
        assert home_href(3) == "../../../"
