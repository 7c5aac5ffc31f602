"""启动占位页渲染"""

from jinja2 import Environment, PackageLoader, select_autoescape

from . import config

_env = Environment(
    loader=PackageLoader("stacklauncher", "templates"),
    autoescape=select_autoescape(["html"]),
)


def compose_command(files: list[str] | None = None, project_name: str | None = None) -> str:
    """占位页上展示的 compose 命令"""
    parts = ["docker", "compose"]
    for path in files or []:
        parts.extend(["-f", path])
    if project_name:
        parts.extend(["-p", project_name])
    parts.extend(["up", "-d"])
    return " ".join(parts)


def render_placeholder(
    app_name: str | None = None,
    url: str | None = None,
    command: str | None = None,
) -> str:
    """渲染 "Starting backend…" 占位页 HTML"""
    template = _env.get_template("splash.html")
    return template.render(
        app_name=app_name or config.APP_NAME,
        url=url or config.APP_URL,
        command=command or compose_command(config.COMPOSE_FILES, config.COMPOSE_PROJECT_NAME),
        background=config.WINDOW_BACKGROUND,
        foreground=config.WINDOW_FOREGROUND,
    )
