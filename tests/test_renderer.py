from cms_publisher.config import MarkdownConfig
from cms_publisher.renderer import MarkdownRenderer


def test_render_heading():
    assert MarkdownRenderer().render("# Hi") == "<h1>Hi</h1>\n"


def test_render_heading_and_paragraph():
    html = MarkdownRenderer().render("## これはテスト用の記事です。\n\nこれはテスト用の記事です。\n")

    assert html == "<h2>これはテスト用の記事です。</h2>\n<p>これはテスト用の記事です。</p>\n"


def test_render_table_and_task_list_plugins():
    body = "| a | b |\n|---|---|\n| 1 | 2 |\n\n- [x] done\n- [ ] todo\n"

    html = MarkdownRenderer().render(body)

    assert "<table>" in html
    assert "<th>a</th>" in html
    assert 'type="checkbox"' in html
    assert "checked" in html


def test_renderer_passes_raw_html_through_by_default():
    html = MarkdownRenderer().render('<div class="note">raw</div>\n')

    assert '<div class="note">raw</div>' in html
    assert "&lt;div" not in html


def test_renderer_escapes_raw_html_when_configured():
    renderer = MarkdownRenderer.from_config(MarkdownConfig(escape=True))

    html = renderer.render("<script>alert(1)</script>\n")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_renderer_from_config_is_callable():
    renderer = MarkdownRenderer.from_config(MarkdownConfig(plugins=[]))

    assert renderer.plugins == []
    assert renderer("*x*") == "<p><em>x</em></p>\n"
