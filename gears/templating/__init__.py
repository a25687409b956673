"""
Jinja2 integration.

    env = Environment(extensions=[GearsExtension], autoescape=True)
    env.from_string('<a{{ attrs | html_attributes }}>Click me</a>').render(attrs={
        'href': 'https://example.com',
        'class': ['important', 'disabled'],
        'style': {'display': 'block', 'color': 'green'},
        'data-json': {'foo': 'bar'},
    })
"""

import math
from typing import Any, Mapping

from jinja2.ext import Extension
from markupsafe import Markup

from ..util.html import render_attributes


def html_attributes(attributes: Mapping[str, Any]) -> Markup:
    """Render a mapping as HTML attributes, see gears.util.html.render_attributes()."""
    return Markup(render_attributes(dict(attributes)))


class GearsExtension(Extension):
    """Registers the ceil and html_attributes filters."""

    def __init__(self, environment):
        super().__init__(environment)
        environment.filters['ceil'] = math.ceil
        environment.filters['html_attributes'] = html_attributes


__all__ = ['GearsExtension', 'html_attributes']
