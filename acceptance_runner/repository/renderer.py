"""HTML rendering of wiki pages for standalone reports."""

import html
import re

from ..errors import ContentFormatError

MAIN_START = '<div class="main">\n'
MAIN_END = "\n</div>\n</body>\n</html>\n"

PAGE_TEMPLATE = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head>\n"
    "<title>{title}</title>\n"
    '<link rel="stylesheet" type="text/css" href="/files/css/fitnesse.css" media="screen"/>\n'
    '<script src="/files/javascript/fitnesse.js" type="text/javascript"></script>\n'
    "</head>\n"
    "<body>\n"
    '<div class="header"><h1>{title}</h1></div>\n'
    + MAIN_START
    + "{body}"
    + MAIN_END
)

COLLAPSIBLE_TEMPLATE = (
    '<div class="collapse_rim">\n'
    "<a href=\"javascript:toggleCollapsable('{id}');\">"
    '<img src="/files/images/collapsableClosed.gif" class="left" id="img{id}"/></a>'
    '&nbsp;<span class="meta">{title}</span>\n'
    '<div class="hidden" id="{id}">{body}</div>\n'
    "</div>\n"
)

# (old, new) pairs applied in order
RESOURCE_REWRITES = [
    ('href="/files/css/', 'href="'),
    ("/files/javascript/", ""),
    ("/files/images/", "images/"),
]

_TABLE_OPEN = re.compile(r"<table\b", re.IGNORECASE)
_TABLE_CLOSE = re.compile(r"</table\s*>", re.IGNORECASE)


def render_page(title: str, body: str) -> str:
    """Wrap page body in a complete HTML document with rewritten links."""
    page = PAGE_TEMPLATE.format(title=html.escape(title), body=body)
    return rewrite_resource_paths(page)


def collapsible_section(section_id: str, title: str, body: str) -> str:
    return COLLAPSIBLE_TEMPLATE.format(id=section_id, title=html.escape(title), body=body)


def rewrite_resource_paths(content: str) -> str:
    """Point stylesheet, script and image links at the report folder layout."""
    for old, new in RESOURCE_REWRITES:
        content = content.replace(old, new)
    return content


def main_section(page: str) -> str:
    """Body of a page produced by ``render_page``."""
    start = page.index(MAIN_START) + len(MAIN_START)
    end = page.rindex(MAIN_END)
    return page[start:end]


def check_table_markup(name: str, content: str) -> str:
    """Return ``content`` unchanged if its table tags are balanced.

    Raises:
        ContentFormatError: On unbalanced ``<table>``/``</table>`` tags.
    """
    opened = len(_TABLE_OPEN.findall(content))
    closed = len(_TABLE_CLOSE.findall(content))
    if opened != closed:
        raise ContentFormatError(
            f"Malformed table markup in {name}: {opened} <table> tags, {closed} </table> tags"
        )
    return content
