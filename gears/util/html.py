"""
HTML utilities built on lxml.

Fragments are parsed into a full document; results are serialized from
the children of the body element.
"""

import html as html_escaping
import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Tuple

from lxml import etree
from lxml import html as lxml_html
from lxml.cssselect import CSSSelector

logger = logging.getLogger(__name__)

TAG_PARAGRAPH = 'p'


def _parse_body(fragment: str):
    document = lxml_html.document_fromstring(f"<html><body>{fragment}</body></html>")
    body = document.find('body')
    if body is None:
        raise RuntimeError('Body tag not found')
    return body


def _outer_html(node) -> str:
    return etree.tostring(node, method='html', encoding='unicode', with_tail=False)


def _escape_text(text: str) -> str:
    return html_escaping.escape(text, quote=False)


def _root_nodes(body) -> Iterator[Tuple[str, int]]:
    # (serialized node, text length) for every root node, text nodes included
    if body.text:
        yield _escape_text(body.text), len(body.text)

    for child in body:
        yield _outer_html(child), len(child.text_content())

        if child.tail:
            yield _escape_text(child.tail), len(child.tail)


def _inner_html(body) -> str:
    return ''.join(serialized for serialized, _ in _root_nodes(body))


def truncate(html: str, limit: int = 1000, ending: str = '') -> str:
    """
    Truncate HTML keeping the tags intact.

    Root nodes are collected one by one. Once the accumulated text length
    exceeds the limit, the node that crossed it is kept and the remaining
    nodes are dropped. The ending is appended to a non-empty result.

        >>> truncate('<p>One</p><p>Two</p><p>Three</p>', limit=3, ending='...')
        '<p>One</p><p>Two</p>...'
    """
    result = ''
    length = 0

    for serialized, text_length in _root_nodes(_parse_body(html)):
        result += serialized
        length += text_length
        if length > limit:
            break

    if result != '':
        result += ending

    return result


def decorate_parent(
    html: str,
    selector: str,
    attributes: Optional[Mapping] = None,
    css_class: str = '',
) -> str:
    """
    Decorate the parents of the nodes matched by a CSS selector.

    Works like the :has() pseudo-class: every element that contains a
    matching node gets the attributes set and the class appended.
    """
    body = _parse_body(html)
    decorated = []

    for node in CSSSelector(selector)(body):
        parent = node.getparent()
        if parent is None or any(parent is seen for seen in decorated):
            continue
        decorated.append(parent)

        for name, value in (attributes or {}).items():
            parent.set(name, str(value))

        if css_class:
            existing = parent.get('class')
            parent.set('class', f"{existing} {css_class}" if existing else css_class)

    logger.debug("Decorated %d parent nodes matching %s", len(decorated), selector)

    return _inner_html(body)


def extract_description(html: str, content_selector: str = '') -> Optional[str]:
    """
    Extract a short description from HTML: the first paragraph.

    The content selector narrows the search to the paragraphs inside the
    matching content node. Returns None if there is no paragraph.
    """
    selector = f"{content_selector} {TAG_PARAGRAPH}".strip()

    for paragraph in CSSSelector(selector)(_parse_body(html)):
        return _outer_html(paragraph)

    return None


def _escape_attribute(value: Any) -> str:
    return _escape_text(str(value)).replace('"', '&quot;')


def _render_attribute(name: str, value: Any) -> Optional[str]:
    if value is None or value is True:
        return name
    if value is False:
        return None

    if isinstance(value, (Mapping, list, tuple, set)):
        kind = name.lower()
        if kind == 'class':
            values = value.values() if isinstance(value, Mapping) else value
            classes: List[str] = []
            for item in values:
                if item and str(item) not in classes:
                    classes.append(str(item))
            return f'{name}="{_escape_attribute(" ".join(classes))}"'

        if kind == 'style':
            if isinstance(value, Mapping):
                rules = [f"{key}: {rule}" for key, rule in value.items()]
            else:
                rules = [str(rule) for rule in value]
            return f'{name}="{_escape_attribute("; ".join(rules) + ";")}"'

        # data-* attributes and the like carry JSON
        encoded = json.dumps(list(value) if isinstance(value, (tuple, set)) else value,
                             separators=(',', ':'))
        encoded = encoded.replace('&', '&amp;').replace("'", '&#39;')
        return f"{name}='{encoded}'"

    return f'{name}="{_escape_attribute(value)}"'


def render_attributes(attributes: Dict[str, Any]) -> str:
    """
    Render a mapping as HTML attributes.

        >>> render_attributes({
        ...     'href': 'https://example.com',
        ...     'class': ['important', None, 'important'],
        ...     'style': {'display': 'block', 'color': 'green'},
        ...     'hidden': True,
        ... })
        ' href="https://example.com" class="important" style="display: block; color: green;" hidden'

    None and True render the bare attribute name, False omits the
    attribute. The result starts with a space unless it is empty.
    """
    rendered = [
        attribute for attribute in
        (_render_attribute(name, value) for name, value in attributes.items())
        if attribute is not None
    ]

    result = ' '.join(rendered).strip()
    return f" {result}" if result else ''
