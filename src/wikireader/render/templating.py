from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined

from wikireader.transform.styles import READER_STYLESHEET
from wikireader.types import Section

_BASE_TEMPLATE = """
<!doctype html>
<html lang="{{ lang }}">
  <head>
    <meta charset="utf-8">
    <title>{{ title }}</title>
    <style>{{ stylesheet|safe }}</style>
  </head>
  <body>
    <main class="wikireader">
      <h1>{{ title }}</h1>
      {% if extract %}<p class="extract">{{ extract }}</p>{% endif %}
      {% block content %}{% endblock %}
    </main>
  </body>
</html>
""".strip()

_PAGE_TEMPLATE = """
{% extends "base.html" %}
{% block content %}
  {% if sections %}
  <nav class="table-of-contents">
    <ul>
    {% for section in sections %}
      <li class="toc-level-{{ section.level }}"><a href="#{{ section.id }}">{{ section.title }}</a></li>
    {% endfor %}
    </ul>
  </nav>
  {% endif %}
  <article>{{ body|safe }}</article>
{% endblock %}
""".strip()


@dataclass(frozen=True)
class Templates:
    env: Environment

    def render_page(self, context: dict[str, Any]) -> str:
        tpl = self.env.get_template("page.html")
        return str(tpl.render(**context))


def create_environment() -> Templates:
    loader = DictLoader({"base.html": _BASE_TEMPLATE, "page.html": _PAGE_TEMPLATE})
    env = Environment(loader=loader, undefined=StrictUndefined, autoescape=True)
    return Templates(env=env)


def render_reader_page(
    title: str,
    body: str,
    sections: list[Section] | None = None,
    *,
    extract: str = "",
    lang: str = "en",
    templates: Templates | None = None,
) -> str:
    """Standalone HTML page around already-transformed article markup.

    The stylesheet is embedded once here; the transformer never emits styles.
    """

    templates = templates or create_environment()
    return templates.render_page(
        {
            "title": title,
            "body": body,
            "sections": sections or [],
            "extract": extract,
            "lang": lang,
            "stylesheet": READER_STYLESHEET,
        }
    )
