"""Final HTML passes applied to every rendered page.

Each pass parses the document with BeautifulSoup, rewrites the selected
elements and serializes the tree again:

* ``highlight_code_blocks`` runs ``<pre><code>`` blocks through Pygments and
  normalizes their class to ``codehilite`` so the stylesheet does not depend
  on the markdown converter's class naming.
* ``replace_sections`` swaps the comments section of a page for other markup,
  which lets the home page reuse the post layout.
"""

import logging

import bs4
import pygments
import pygments.formatters
import pygments.lexers
import pygments.util

logger = logging.getLogger(__name__)

CODE_CLASS = 'codehilite'
CODE_SELECTOR = 'pre > code'
COMMENTS_SELECTOR = 'section.comments'
LANGUAGE_PREFIXES = ('language-', 'lang-')

_FORMATTER = pygments.formatters.HtmlFormatter(nowrap=True)


def _parse(html: str) -> bs4.BeautifulSoup:
    return bs4.BeautifulSoup(html, 'html.parser')


def code_language(code: bs4.Tag) -> str | None:
    """Returns the language hint of a code block, None if it has none.

    Blocks already carrying the highlight class have no hint left.
    """
    classes = code.get('class') or []
    if isinstance(classes, str):
        classes = classes.split()
    for css_class in classes:
        if css_class == CODE_CLASS:
            return None
        for prefix in LANGUAGE_PREFIXES:
            if css_class.startswith(prefix):
                return css_class[len(prefix) :]
        return css_class
    return None


def highlight_code(code: str, language: str) -> str | None:
    """Returns Pygments markup for code, or None for an unknown language."""
    try:
        lexer = pygments.lexers.get_lexer_by_name(language)
    except pygments.util.ClassNotFound:
        return None
    return pygments.highlight(code, lexer, _FORMATTER)


def highlight_code_blocks(html: str) -> str:
    """Highlight every code block and normalize its class attribute.

    Blocks without a usable language keep their original text.
    """
    if '<code' not in html:
        return html

    soup = _parse(html)
    for code in soup.select(CODE_SELECTOR):
        language = code_language(code)
        if language is None:
            continue
        highlighted = highlight_code(code.get_text(), language)
        if highlighted is None:
            logger.debug('No lexer for %r, leaving code block as plain text', language)
            continue
        code.clear()
        for node in list(_parse(highlighted).contents):
            code.append(node)

    for code in soup.select(CODE_SELECTOR):
        code['class'] = CODE_CLASS
    return str(soup)


def replace_sections(html: str, replacement: str) -> str:
    """Replace every comments section with the replacement markup."""
    soup = _parse(html)
    for section in soup.select(COMMENTS_SELECTOR):
        for node in list(_parse(replacement).contents):
            section.insert_before(node)
        section.decompose()
    return str(soup)


def drop_sections(html: str) -> str:
    """Remove every comments section."""
    return replace_sections(html, '')


def process_page(html: str) -> str:
    """The post-processing applied to a page before it is served or exported."""
    return highlight_code_blocks(html)
