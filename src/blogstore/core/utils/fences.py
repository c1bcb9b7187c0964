"""Code fence balance checks and language extraction for markdown bodies

Two kinds of code block are recognised: markdown fences (``` or ~~~) and
Liquid highlight blocks ({% highlight lang %} ... {% endhighlight %}).
"""

import re

from blogstore.core.utils.tokens import make_parser


HIGHLIGHT_RE = re.compile(r'{%-?\s*(highlight\s+(?P<lang>[\w+#.-]+)[^%]*|endhighlight\s*)-?%}')


def _line_count(text: str) -> int:
    return text.count('\n') + (1 if text and not text.endswith('\n') else 0)


def _is_closed(token) -> bool:
    """A fence is closed when markdown-it consumed a closing line.

    The mapped span then covers the opening line, the content and the
    closing line, so the content is exactly two lines shorter than the span.
    An unclosed fence runs to the end of its container and keeps every line.
    """
    start, end = token.map
    return end - start >= 2 and _line_count(token.content) == end - start - 2


def _fence_tokens(tokens: list) -> list:
    return [t for t in tokens if t.type == 'fence']


def _inline_lines(token) -> list[tuple[int, str]]:
    """(line_number, text) pairs for an inline token's text, with code spans blanked out."""
    lineno = token.map[0] + 1 if token.map else 1
    lines: list[tuple[int, str]] = []
    current = ''
    for child in token.children or []:
        if child.type in ('softbreak', 'hardbreak'):
            lines.append((lineno, current))
            lineno += 1
            current = ''
        elif child.type == 'code_inline':
            current += ' '
        elif child.type in ('text', 'text_special'):
            current += child.content
    lines.append((lineno, current))
    return lines


def _liquid_tags(tokens: list) -> list[tuple[int, re.Match]]:
    """Highlight/endhighlight tags in prose; tags in fences, code blocks or code spans are content."""
    found = []
    for tok in tokens:
        if tok.type != 'inline':
            continue
        for lineno, text in _inline_lines(tok):
            found.extend((lineno, m) for m in HIGHLIGHT_RE.finditer(text))
    return found


def unbalanced_fences(tokens: list) -> list[int]:
    """Return 1-based line numbers of code blocks that are opened but never closed.

    Covers markdown fences (an unclosed fence runs to the end of its container)
    and Liquid highlight tags, which must strictly alternate open/close.
    """
    problems = [tok.map[0] + 1 for tok in _fence_tokens(tokens) if tok.map and not _is_closed(tok)]

    open_line = None
    for lineno, m in _liquid_tags(tokens):
        opening = m.group('lang') is not None
        if opening and open_line is None:
            open_line = lineno
        elif not opening and open_line is not None:
            open_line = None
        else:
            problems.append(lineno)
    if open_line is not None:
        problems.append(open_line)
    return sorted(problems)


def fence_languages(markdown: str, preset: str = "gfm-like") -> list[str]:
    """Distinct language tags of fences and highlight blocks, in order of first appearance."""
    tokens = make_parser(preset).parse(markdown)
    found = [(t.map[0] + 1, t.info.split()[0]) for t in _fence_tokens(tokens) if t.map and t.info.strip()]
    found.extend((lineno, m.group('lang')) for lineno, m in _liquid_tags(tokens) if m.group('lang'))
    return list(dict.fromkeys(lang for _, lang in sorted(found, key=lambda f: f[0])))
