import logging

from wiki.config import Config
from wiki.exceptions import RenderFailure
from wiki.renderer import Renderer
from wiki.types import Page
from tests.base import TestCase

logger = logging.getLogger(__name__)


class TestRenderer(TestCase):
    def test_render_view(self):
        renderer = Renderer(config=self.get_config())
        html = renderer.render("view", Page(name="Alpha", body=b"Hello, world!"))
        self.assertIsInstance(html, bytes)
        self.assertIn(b"<h1>Alpha</h1>", html)
        self.assertIn(b"Hello, world!", html)
        self.assertIn(b'href="/edit/Alpha"', html)

    def test_render_edit(self):
        renderer = Renderer(config=self.get_config())
        html = renderer.render("edit", Page(name="Alpha", body=b"Some text"))
        self.assertIn(b"Editing Alpha", html)
        self.assertIn(b'action="/save/Alpha"', html)
        self.assertIn(b'name="body"', html)
        self.assertIn(b">Some text</textarea>", html)

    def test_render_edit_empty(self):
        renderer = Renderer(config=self.get_config())
        html = renderer.render("edit", Page(name="New"))
        self.assertIn(b"></textarea>", html)

    def test_render_escapes(self):
        renderer = Renderer(config=self.get_config())
        html = renderer.render("view", Page(name="Alpha", body=b"<script>x</script>"))
        self.assertNotIn(b"<script>", html)
        self.assertIn(b"&lt;script&gt;", html)

    def test_render_invalid_utf8(self):
        renderer = Renderer(config=self.get_config())
        html = renderer.render("view", Page(name="Alpha", body=b"ok \xff\xfe"))
        self.assertIn("ok ��".encode("utf-8"), html)

    def test_render_is_pure(self):
        renderer = Renderer(config=self.get_config())
        page = Page(name="Alpha", body=b"same")
        self.assertEqual(renderer.render("view", page), renderer.render("view", page))

    def test_render_markdown(self):
        config = self.get_config()
        config.templates.markdown = True
        renderer = Renderer(config=config)
        html = renderer.render("view", Page(name="Alpha", body=b"# Title\n\n*em*"))
        self.assertIn(b"<h1>Title</h1>", html)
        self.assertIn(b"<em>em</em>", html)

    def test_render_markdown_escapes_html(self):
        config = self.get_config()
        config.templates.markdown = True
        renderer = Renderer(config=config)
        html = renderer.render(
            "view", Page(name="Alpha", body=b"<script>alert(1)</script> **bold**")
        )
        self.assertNotIn(b"<script>", html)
        self.assertIn(b"&lt;script&gt;alert(1)&lt;/script&gt;", html)
        self.assertIn(b"<strong>bold</strong>", html)

    def test_unknown_mode(self):
        renderer = Renderer(config=self.get_config())
        with self.assertRaises(RenderFailure):
            renderer.render("delete", Page(name="Alpha"))

    def test_missing_template(self):
        config = self.get_config()
        config.templates.path = self.tmpdir / "templates"
        config.templates.path.mkdir()
        (config.templates.path / "view.html").write_text("{{ page.name }}")
        with self.assertRaises(RenderFailure):
            Renderer(config=config)

    def test_broken_template(self):
        config = self.get_config()
        config.templates.path = self.tmpdir / "templates"
        config.templates.path.mkdir()
        (config.templates.path / "view.html").write_text("{{ page.name }}")
        (config.templates.path / "edit.html").write_text("{% if page.name %}")
        with self.assertRaises(RenderFailure) as ctx:
            Renderer(config=config)
        logger.debug("error=%s", ctx.exception)

    def test_render_time_failure(self):
        config = self.get_config()
        config.templates.path = self.tmpdir / "templates"
        config.templates.path.mkdir()
        (config.templates.path / "view.html").write_text("{{ page.missing }}")
        (config.templates.path / "edit.html").write_text("{{ page.name }}")
        renderer = Renderer(config=config)
        self.assertEqual(renderer.render("edit", Page(name="Alpha")), b"Alpha")
        with self.assertRaises(RenderFailure):
            renderer.render("view", Page(name="Alpha"))

    def test_default_config_renders(self):
        renderer = Renderer(config=Config())
        self.assertIn(b"Alpha", renderer.render("view", Page(name="Alpha")))
