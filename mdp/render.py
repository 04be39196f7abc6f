#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Markdown -> sanitized HTML -> templated HTML document.

Exports:
- DEFAULT_TEMPLATE: built-in page skeleton (title, filename, body)
- TITLE: fixed page title placed in every rendered document
- RenderContext: the values handed to the template
- sanitize(html): strip anything outside the user-content allowlist
- load_template(path): parse a template file, or the default when path is None
- render(markdown_bytes, template_source, display_name): the whole pipeline
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import markdown
from bleach import html5lib_shim
from bleach.sanitizer import Cleaner
from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, TemplateNotFound
from markupsafe import Markup

from mdp.errors import RenderError, TemplateLoadError

TITLE = "Markdown Preview Tool"

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta http-equiv="content-type" content="text/html; charset=utf-8">
    <title>{{ title }}</title>
  </head>
  <body>
    <p>Previewing file: {{ filename }}</p>
    {{ body }}
  </body>
</html>
"""

MARKDOWN_EXTENSIONS: list[str] = [
    "tables",
    "fenced_code",
    "sane_lists",
    "def_list",
    "pymdownx.tilde",  # ~~strike~~
    "pymdownx.magiclink",  # bare URLs become links
]

# ---------------------------------------------------------------------------
# Sanitizer policy (user-generated content)
# ---------------------------------------------------------------------------

ALLOWED_TAGS: frozenset[str] = frozenset({
    "a", "abbr", "b", "blockquote", "br", "code", "dd", "del", "div", "dl", "dt",
    "em", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "ins", "kbd",
    "li", "ol", "p", "pre", "s", "samp", "span", "strong", "sub", "sup",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
})

ALLOWED_ATTRIBUTES: dict[str, list[str]] = {
    "a": ["href", "title"],
    "abbr": ["title"],
    "code": ["class"],  # fenced_code emits class="language-xyz"
    "img": ["src", "alt", "title", "width", "height"],
    "ol": ["start"],
    "td": ["align"],
    "th": ["align"],
}

ALLOWED_PROTOCOLS: frozenset[str] = frozenset({"http", "https", "mailto"})

# Dropped together with their content; stripping only the tags would leave
# script bodies and CSS behind as visible text
DROP_CONTENT_TAGS: tuple[str, ...] = (
    "script", "style", "iframe", "frame", "frameset", "noembed", "noframes",
    "noscript", "object", "title", "template", "textarea",
)


class NoFollowFilter(html5lib_shim.Filter):
    """Set rel="nofollow" on every link that survived sanitizing."""

    def __iter__(self):
        for token in html5lib_shim.Filter.__iter__(self):
            if token["type"] in ("StartTag", "EmptyTag") and token["name"] == "a":
                attrs = dict(token.get("data") or {})
                if (None, "href") in attrs:
                    attrs[(None, "rel")] = "nofollow"
                    token["data"] = attrs
            yield token


_cleaner = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=True,
    strip_comments=True,
    filters=[NoFollowFilter],
)

_env = Environment(autoescape=True, undefined=StrictUndefined)


@dataclass(frozen=True)
class RenderContext:
    title: str
    body: Markup
    filename: str

    def as_dict(self) -> dict[str, object]:
        return {"title": self.title, "body": self.body, "filename": self.filename}


def to_html(text: str) -> str:
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html5")


def drop_content_tags(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    found = soup.find_all(DROP_CONTENT_TAGS)
    if not found:
        return html
    for tag in found:
        if not tag.decomposed:
            tag.decompose()
    return str(soup)


def sanitize(html: str) -> str:
    """Remove script-capable markup; keep ordinary formatting."""
    return _cleaner.clean(drop_content_tags(html))


def load_template(template_source: Optional[str]) -> Template:
    """
    Parse the template at `template_source`, or DEFAULT_TEMPLATE when None.
    Any failure to read or parse an explicit file is a TemplateLoadError.
    """
    if template_source is None:
        return _env.from_string(DEFAULT_TEMPLATE)

    folder, name = os.path.split(os.path.abspath(template_source))
    file_env = _env.overlay(loader=FileSystemLoader(folder, encoding="utf-8"))
    try:
        return file_env.get_template(name)
    except TemplateNotFound as e:
        raise TemplateLoadError(f"failed to load template file: {template_source}: not found") from e
    except TemplateError as e:
        raise TemplateLoadError(f"failed to load template file: {template_source}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(f"failed to load template file: {template_source}: {e}") from e


def render(markdown_bytes: bytes, template_source: Optional[str], display_name: str) -> bytes:
    """
    Render Markdown source into a complete HTML document.

    Args:
        markdown_bytes: raw Markdown input
        template_source: template path, or None for DEFAULT_TEMPLATE
        display_name: shown in the "Previewing file" marker

    Returns:
        UTF-8 encoded HTML document
    """
    text = markdown_bytes.decode("utf-8-sig", errors="replace")
    body = sanitize(to_html(text))

    template = load_template(template_source)

    # Already sanitized; Markup keeps autoescape from escaping it twice
    ctx = RenderContext(title=TITLE, body=Markup(body), filename=display_name)
    try:
        page = template.render(**ctx.as_dict())
    except TemplateError as e:
        raise RenderError(f"failed to render template: {e}") from e
    return page.encode("utf-8")


__all__ = [
    "ALLOWED_ATTRIBUTES",
    "ALLOWED_PROTOCOLS",
    "ALLOWED_TAGS",
    "DEFAULT_TEMPLATE",
    "MARKDOWN_EXTENSIONS",
    "RenderContext",
    "TITLE",
    "load_template",
    "render",
    "sanitize",
    "to_html",
]
