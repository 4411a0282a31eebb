import json
from functools import lru_cache
from importlib.resources import files


API_KEY_PLACEHOLDER = "__TASK_SERVICE_API_KEY__"


@lru_cache
def _template() -> str:
    return files("task_service").joinpath("static/dashboard.html").read_text(encoding="utf-8")


def render_dashboard(api_key: str | None = None) -> str:
    """Return the dashboard page.

    Without ``api_key`` the page asks the user for the key. With it, the key
    is written into the page script, which is only acceptable for a trusted
    local setup.
    """
    # "<" is escaped so a key can never close the surrounding <script> tag
    embedded = json.dumps(api_key or None).replace("<", "\\u003c")
    return _template().replace(API_KEY_PLACEHOLDER, embedded)
