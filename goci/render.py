"""
Plan rendering.

Renders an ExecutionPlan for people and for other engines:
- text: a short human-readable summary
- json: the plan as a JSON document
- dockerfile: a BuildKit Dockerfile with the same image, cache mounts,
  environment, copied files and command
"""

import json
from pathlib import Path
from typing import Mapping, Optional

from jinja2 import Environment, FileSystemLoader

from .errors import GociError
from .golang.plan import ExecutionPlan

FORMATS = ("text", "json", "dockerfile")

_TEMPLATES = {
    "text": "plan.txt.j2",
    "dockerfile": "plan.Dockerfile.j2",
}


def _environment() -> Environment:
    templates_dir = Path(__file__).parent / "templates"
    if not templates_dir.exists():
        raise FileNotFoundError(f"Templates directory not found at: {templates_dir}")

    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["quote"] = json.dumps
    return env


def render_plan(
    plan: ExecutionPlan, fmt: str = "text", extra_env: Optional[Mapping[str, str]] = None
) -> str:
    """
    Render an execution plan.

    Parameters
    ----------
    plan : ExecutionPlan
        Plan to render.
    fmt : str
        One of FORMATS.
    extra_env : Mapping[str, str], optional
        Variables a client decorator would add to the container (for example
        the CI environment). Plan variables take precedence on conflicts.

    Returns
    -------
    str
        Rendered document.

    Raises
    ------
    GociError
        If the format is unknown.
    """
    if fmt not in FORMATS:
        raise GociError(f"Unknown output format '{fmt}'. Expected one of {FORMATS}")

    env = dict(extra_env or {})
    env.update(plan.env)

    if fmt == "json":
        data = plan.to_dict()
        data["env"] = dict(sorted(env.items()))
        return json.dumps(data, indent=2) + "\n"

    template = _environment().get_template(_TEMPLATES[fmt])
    return template.render(plan=plan, env=sorted(env.items()))
