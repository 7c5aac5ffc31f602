"""占位页渲染测试"""

from stacklauncher.splash import compose_command, render_placeholder


class TestComposeCommand:
    def test_default(self):
        assert compose_command() == "docker compose up -d"

    def test_files_and_project(self):
        assert (
            compose_command(["a.yml", "b.yml"], "flumio")
            == "docker compose -f a.yml -f b.yml -p flumio up -d"
        )


class TestRenderPlaceholder:
    def test_contains_app_and_url(self):
        html = render_placeholder(app_name="Acme", url="http://localhost:9000", command="docker compose up -d")

        assert "<title>Starting backend…</title>" in html
        assert "Starting Acme…" in html
        assert "http://localhost:9000" in html
        assert "docker compose up -d" in html

    def test_values_are_escaped(self):
        html = render_placeholder(app_name="<script>x</script>", url="http://localhost", command="up")

        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html
