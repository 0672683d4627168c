"""
Syntax categorisation module for the editor using Pygments.
"""

import logging
import re
from typing import List, Tuple, Dict, Optional, Any, Final, NamedTuple

import grapheme
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_for_filename
from pygments.lexers.python import PythonLexer
from pygments.lexers.javascript import JavascriptLexer
from pygments.lexers.html import HtmlLexer
from pygments.lexers.css import CssLexer
from pygments.lexers.c_cpp import CLexer, CppLexer
from pygments.lexers.jvm import JavaLexer
from pygments.lexers.php import PhpLexer
from pygments.lexers.ruby import RubyLexer
from pygments.lexers.shell import BashLexer
from pygments.lexers.rust import RustLexer
from pygments.lexers.dotnet import CSharpLexer
from pygments.lexers.special import TextLexer
from pygments.token import Token
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY: Final[str] = 'default'

C_PATTERN: Final[str] = r'^\s*(#include|int\s+main|void\s+main|struct\s+\w+\s*{)'
CPP_PATTERN: Final[str] = r'^\s*(class\s+\w+|namespace\s+\w+|template\s*<)'

LANGUAGE_PATTERNS: Final[List[Tuple[str, type]]] = [
    (r'^\s*(#!.*python|def\s+\w+\s*\(|import\s+\w+|from\s+[\w.]+\s+import|if __name__ == [\'"]__main__[\'"])',
        PythonLexer),
    (r'^\s*(#!\s*/bin/(ba)?sh|function\s+\w+\s*\(\))',
        BashLexer),
    (r'^\s*(fn\s+\w+|pub\s+(fn|struct|enum)|use\s+\w+::)',
        RustLexer),
    (r'^\s*(<\?php|namespace\s+[\w\\]+;|use\s+[\w\\]+;)',
        PhpLexer),
    (r'^\s*(using\s+System|namespace\s+\w+\s*{)',
        CSharpLexer),
    (r'^\s*(package\s+[\w.]+;|import\s+java)',
        JavaLexer),
    (r'<html|<!DOCTYPE html|<body|<script|<div',
        HtmlLexer),
    (r'^\s*(function\s+\w+|const\s+\w+\s*=|let\s+\w+|document\.|window\.)',
        JavascriptLexer),
    (r'^\s*(require\s+[\'"]|module\s+[A-Z]\w*|class\s+\w+\s*<)',
        RubyLexer),
    (r'^\s*(@media|body\s*{|html\s*{)',
        CssLexer),
]

TOKEN_CATEGORY_MAP: Final[Dict[Any, str]] = {
    Token.Keyword: 'keyword',
    Token.Keyword.Type: 'type',
    Token.Keyword.Constant: 'keyword',
    Token.Operator.Word: 'keyword',

    Token.Name.Class: 'class',
    Token.Name.Function: 'function',
    Token.Name.Function.Magic: 'function',
    Token.Name.Decorator: 'decorator',
    Token.Name.Builtin: 'builtin',
    Token.Name.Builtin.Pseudo: 'builtin',
    Token.Name.Variable: 'variable',
    Token.Name.Tag: 'keyword',
    Token.Name.Attribute: 'variable',

    Token.String: 'string',
    Token.Comment: 'comment',
    Token.Number: 'number',
    Token.Operator: 'operator',

    Token.Text: DEFAULT_CATEGORY,
}


class SyntaxConfigError(Exception):
    """Raised when no syntax definition is available for a file."""


class HighlightSpan(NamedTuple):
    """A categorised grapheme range `[start, end)` of one line."""
    category: str
    start: int
    end: int


def token_category(token_type: Any) -> str:
    """
    Get the category for a token type.

    Args:
        token_type: The Pygments token type

    Returns:
        The category of the closest mapped ancestor, or the default category
    """

    while token_type is not None:
        if token_type in TOKEN_CATEGORY_MAP:
            return TOKEN_CATEGORY_MAP[token_type]
        token_type = token_type.parent

    return DEFAULT_CATEGORY


class SyntaxHighlighter:
    """Selects a lexer for a file and categorises its text."""

    def __init__(self, filename: Optional[str] = None, content: str = '',
                 allow_plain_text: bool = True) -> None:
        self.lexer: Optional[Lexer] = None
        self.language: Optional[str] = None

        if not self.detect_language(filename or '', content):
            if not allow_plain_text:
                raise SyntaxConfigError(
                    f"No syntax definition for {filename or 'buffer'} and plain text is disabled"
                )
            self.lexer = TextLexer(stripnl=False)
            self.language = 'Text'
            logger.debug("No lexer for %s, using plain text", filename)

    def detect_language(self, filename: str, content: str) -> Optional[str]:
        """
        Detect the language of a file based on its name and content.

        Args:
            filename: The name of the file
            content: The content of the file

        Returns:
            The detected language or None if not detected
        """

        if filename:
            try:
                self.lexer = get_lexer_for_filename(filename, stripnl=False)
                self.language = self.lexer.name
                return self.language
            except ClassNotFound:
                pass

        for pattern, lexer_class in LANGUAGE_PATTERNS:
            if re.search(pattern, content, re.MULTILINE):
                self.lexer = lexer_class(stripnl=False)
                self.language = self.lexer.name
                return self.language

        if re.search(C_PATTERN, content, re.MULTILINE):
            if re.search(CPP_PATTERN, content, re.MULTILINE):
                self.lexer = CppLexer(stripnl=False)
            else:
                self.lexer = CLexer(stripnl=False)
            self.language = self.lexer.name
            return self.language

        return None

    def categorize(self, lines: List[str]) -> List[List[HighlightSpan]]:
        """
        Categorise a whole document.

        The lexer runs over the full text so constructs spanning several
        lines, such as block comments, are categorised correctly.

        Args:
            lines: The lines of the document

        Returns:
            One list of spans per line, covering the line's graphemes in order
        """

        # Pygments turns a lone carriage return into a line break and drops a
        # leading byte order mark; keep offsets aligned with the lines.
        text = '\n'.join(line.replace('\r', ' ').replace('\ufeff', ' ') for line in lines)

        categories: List[List[str]] = [[]]
        for token_type, value in self.lexer.get_tokens(text):
            category = token_category(token_type)
            pieces = value.split('\n')
            categories[-1].extend(category for _ in pieces[0])
            for piece in pieces[1:]:
                categories.append([category for _ in piece])

        result = []
        for number, line in enumerate(lines):
            row = categories[number] if number < len(categories) else []
            result.append(_snap_to_graphemes(line, row))

        return result

    def get_language_name(self) -> Optional[str]:
        """Get the name of the currently detected language."""

        return self.language


def _snap_to_graphemes(line: str, char_categories: List[str]) -> List[HighlightSpan]:
    """Turn per-code-point categories into spans on grapheme boundaries."""

    spans: List[HighlightSpan] = []
    offset = 0
    for index, cluster in enumerate(grapheme.graphemes(line)):
        category = char_categories[offset] if offset < len(char_categories) else DEFAULT_CATEGORY
        offset += len(cluster)

        if spans and spans[-1].category == category:
            spans[-1] = spans[-1]._replace(end=index + 1)
        else:
            spans.append(HighlightSpan(category, index, index + 1))

    return spans
