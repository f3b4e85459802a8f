"""Built-in language rules.

Each rule lists its token categories in priority order: comments and
strings come first so that keywords, numbers and operators are never
recognised inside them, and keywords come before operators so a greedy
operator run cannot shadow them. String and block comment patterns stop
at the closing delimiter or at end of input, so an unterminated literal
highlights to the end of the text instead of failing.
"""

from __future__ import annotations

import re

from code_snippets.models import LanguageRule, TokenCategory


def _words(*words: str) -> str:
    return r"\b(?:" + "|".join(words) + r")\b"


# ── Shared patterns ─────────────────────────────────────────

C_COMMENT = r"//[^\n]*|/\*[\s\S]*?(?:\*/|\Z)"
DQ_STRING = r'"(?:[^"\\]|\\[\s\S])*(?:"|\Z)'
SQ_STRING = r"'(?:[^'\\]|\\[\s\S])*(?:'|\Z)"
NUMBER = (
    r"\b(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|\d[\d_]*(?:\.\d+)?(?:[eE][+-]?\d+)?)"
    r"[lLfFdDuU]*\b"
)
OPERATOR = r"(?:[+\-*%=&|^!~<>?:]|/(?![/*]))+"


# ── Function signatures ────────────────────────────────────

JAVA_FUNCTION = (
    r"^[ \t]*"
    r"(?:@[\w.]+(?:\([^)]*\))?\s+)*"
    r"(?:(?:public|protected|private|static|final|abstract|synchronized|native|strictfp|default)[ \t]+)*"
    r"(?:<[^>{};]*>[ \t]+)?"
    r"(?:[\w<>\[\],.?]+[ \t]+)*?"
    r"([A-Za-z_$][\w$]*)\s*\([^)]*\)\s*"
    r"(?:throws\s+[\w.,\s]+?)?\{"
)

CPP_FUNCTION = (
    r"^[ \t]*"
    r"(?:template\s*<[^>{};]*>\s*)?"
    r"(?:(?:static|inline|virtual|explicit|extern|constexpr|friend|unsigned|signed|const|volatile)[ \t]+)*"
    r"(?:[\w<>\[\],.:]+[*& \t]+)*?"
    r"((?:[A-Za-z_]\w*::)*~?[A-Za-z_]\w*)\s*\([^)]*\)\s*"
    r"(?:const\s*)?(?:noexcept\s*)?(?:override\s*)?(?:final\s*)?"
    r"(?:->\s*[\w:<>*&]+\s*)?(?::\s*[^{;]*)?\{"
)

CSHARP_FUNCTION = (
    r"^[ \t]*"
    r"(?:(?:public|private|protected|internal|static|virtual|override|abstract|sealed"
    r"|async|extern|unsafe|new|partial|readonly)[ \t]+)*"
    r"(?:[\w<>\[\],.?]+[ \t]+)*?"
    r"([A-Za-z_]\w*)\s*(?:<[^>(){};]*>)?\s*\([^)]*\)\s*"
    r"(?:where\s+[^{;]*)?\{"
)

# Named function first, then assignment of a function or arrow, then
# class/object method shorthand.
JAVASCRIPT_FUNCTION = "|".join([
    r"(?:^[ \t]*(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*"
    r"([A-Za-z_$][\w$]*)\s*\([^)]*\)\s*\{)",
    r"(?:^[ \t]*(?:export\s+)?(?:(?:const|let|var)\s+)?([A-Za-z_$][\w$.]*)\s*(?::|=(?![=>]))\s*"
    r"(?:async\s+)?(?:function\s*\*?\s*[\w$]*\s*\([^)]*\)|\([^)]*\)\s*=>|[A-Za-z_$][\w$]*\s*=>)\s*\{)",
    r"(?:^[ \t]*(?:(?:static|async|get|set)[ \t]+)*\*?[ \t]*([A-Za-z_$][\w$]*)\s*\([^)]*\)\s*\{)",
])

PYTHON_FUNCTION = r"^[ \t]*(?:async[ \t]+)?def[ \t]+([A-Za-z_]\w*)"


# ── Rules ──────────────────────────────────────────────────

JAVA = LanguageRule(
    key="java",
    aliases=("Java",),
    extension=".java",
    function_pattern=JAVA_FUNCTION,
    block_style="brace",
    categories=(
        TokenCategory("comment", C_COMMENT, "comment"),
        TokenCategory("string", DQ_STRING + "|" + SQ_STRING, "string"),
        TokenCategory("annotation", r"@[A-Za-z_][\w.]*", "annotation"),
        TokenCategory("keyword", _words(
            "abstract", "assert", "boolean", "break", "byte", "case", "catch",
            "char", "class", "const", "continue", "default", "do", "double",
            "else", "enum", "extends", "final", "finally", "float", "for",
            "goto", "if", "implements", "import", "instanceof", "int",
            "interface", "long", "native", "new", "package", "private",
            "protected", "public", "record", "return", "short", "static",
            "strictfp", "super", "switch", "synchronized", "this", "throw",
            "throws", "transient", "try", "var", "void", "volatile", "while",
            "true", "false", "null",
        ), "keyword"),
        TokenCategory("type", _words("String", "Object", "Integer", "List", "Map"), "keyword"),
        TokenCategory("number", NUMBER, "number"),
        TokenCategory("operator", OPERATOR, "operator"),
    ),
)

PYTHON = LanguageRule(
    key="python",
    aliases=("Python", "py"),
    extension=".py",
    function_pattern=PYTHON_FUNCTION,
    block_style="indent",
    categories=(
        TokenCategory("comment", r"#[^\n]*", "comment"),
        TokenCategory(
            "string",
            r"(?<!\w)[rRbBuUfF]{0,2}"
            r"""(?:\"\"\"[\s\S]*?(?:\"\"\"|\Z)|'''[\s\S]*?(?:'''|\Z)|"""
            + DQ_STRING + "|" + SQ_STRING + ")",
            "string",
        ),
        TokenCategory("decorator", r"@[A-Za-z_][\w.]*", "annotation"),
        TokenCategory("keyword", _words(
            "False", "None", "True", "and", "as", "assert", "async", "await",
            "break", "class", "continue", "def", "del", "elif", "else",
            "except", "finally", "for", "from", "global", "if", "import", "in",
            "is", "lambda", "nonlocal", "not", "or", "pass", "raise", "return",
            "try", "while", "with", "yield", "self", "cls",
        ), "keyword"),
        TokenCategory("builtin", _words(
            "print", "len", "range", "int", "str", "float", "list", "dict",
            "set", "tuple", "bool", "isinstance", "super", "open", "enumerate",
        ), "builtin"),
        TokenCategory("number", NUMBER, "number"),
        TokenCategory("operator", r"[+\-*/%=&|^!~<>@]+", "operator"),
    ),
)

JAVASCRIPT = LanguageRule(
    key="javascript",
    aliases=("JavaScript", "js", "TypeScript", "ts"),
    extension=".js",
    function_pattern=JAVASCRIPT_FUNCTION,
    block_style="brace",
    categories=(
        TokenCategory("comment", C_COMMENT, "comment"),
        TokenCategory(
            "string",
            DQ_STRING + "|" + SQ_STRING + r"|`(?:[^`\\]|\\[\s\S])*(?:`|\Z)",
            "string",
        ),
        TokenCategory("keyword", _words(
            "async", "await", "break", "case", "catch", "class", "const",
            "continue", "debugger", "default", "delete", "do", "else", "export",
            "extends", "finally", "for", "from", "function", "if", "import",
            "in", "instanceof", "let", "new", "of", "return", "static", "super",
            "switch", "this", "throw", "try", "typeof", "var", "void", "while",
            "with", "yield", "true", "false", "null", "undefined",
        ), "keyword"),
        TokenCategory("number", NUMBER, "number"),
        TokenCategory("operator", OPERATOR, "operator"),
    ),
)

CPP = LanguageRule(
    key="cpp",
    aliases=("C++", "c", "C", "cxx"),
    extension=".cpp",
    function_pattern=CPP_FUNCTION,
    block_style="brace",
    categories=(
        TokenCategory("comment", C_COMMENT, "comment"),
        TokenCategory("preprocessor", r"^[ \t]*#[^\n]*", "preprocessor", re.MULTILINE),
        TokenCategory("string", DQ_STRING + "|" + SQ_STRING, "string"),
        TokenCategory("keyword", _words(
            "auto", "bool", "break", "case", "catch", "char", "class", "const",
            "constexpr", "continue", "default", "delete", "do", "double",
            "else", "enum", "explicit", "extern", "false", "float", "for",
            "friend", "goto", "if", "inline", "int", "long", "namespace", "new",
            "nullptr", "operator", "private", "protected", "public", "return",
            "short", "signed", "sizeof", "static", "struct", "switch",
            "template", "this", "throw", "true", "try", "typedef", "typename",
            "union", "unsigned", "using", "virtual", "void", "volatile", "while",
        ), "keyword"),
        TokenCategory("number", NUMBER, "number"),
        TokenCategory("operator", OPERATOR, "operator"),
    ),
)

CSHARP = LanguageRule(
    key="csharp",
    aliases=("C#", "cs"),
    extension=".cs",
    function_pattern=CSHARP_FUNCTION,
    block_style="brace",
    categories=(
        TokenCategory("comment", C_COMMENT, "comment"),
        TokenCategory(
            "string",
            r'@"(?:[^"]|"")*(?:"|\Z)|\$?' + DQ_STRING + "|" + SQ_STRING,
            "string",
        ),
        TokenCategory("keyword", _words(
            "abstract", "as", "async", "await", "base", "bool", "break", "case",
            "catch", "char", "class", "const", "continue", "decimal", "default",
            "do", "double", "else", "enum", "false", "finally", "float", "for",
            "foreach", "if", "in", "int", "interface", "internal", "is", "long",
            "namespace", "new", "null", "object", "out", "override", "private",
            "protected", "public", "readonly", "ref", "return", "sealed",
            "static", "string", "struct", "switch", "this", "throw", "true",
            "try", "using", "var", "virtual", "void", "while",
        ), "keyword"),
        TokenCategory("number", NUMBER, "number"),
        TokenCategory("operator", OPERATOR, "operator"),
    ),
)

SQL = LanguageRule(
    key="sql",
    aliases=("SQL", "postgresql", "mysql"),
    extension=".sql",
    categories=(
        TokenCategory("comment", r"--[^\n]*|/\*[\s\S]*?(?:\*/|\Z)", "comment"),
        TokenCategory("string", r"'(?:[^']|'')*(?:'|\Z)", "string"),
        TokenCategory("keyword", _words(
            "select", "from", "where", "insert", "into", "values", "update",
            "set", "delete", "create", "alter", "drop", "table", "view",
            "index", "trigger", "function", "procedure", "join", "inner",
            "left", "right", "outer", "full", "on", "group", "by", "order",
            "having", "limit", "offset", "as", "and", "or", "not", "null",
            "is", "in", "exists", "between", "like", "distinct", "union",
            "primary", "key", "foreign", "references", "default", "unique",
            "begin", "end", "returns", "return", "case", "when", "then",
            "else", "with", "asc", "desc",
        ), "keyword", re.IGNORECASE),
        TokenCategory(
            "builtin",
            _words("count", "sum", "avg", "min", "max", "coalesce", "now"),
            "builtin",
            re.IGNORECASE,
        ),
        TokenCategory("number", NUMBER, "number"),
        TokenCategory("operator", r"(?:[+*%=<>!|]|-(?!-)|/(?!\*))+", "operator"),
    ),
)

HTML = LanguageRule(
    key="html",
    aliases=("HTML", "htm", "xml"),
    extension=".html",
    categories=(
        TokenCategory("comment", r"<!--[\s\S]*?(?:-->|\Z)", "comment"),
        TokenCategory("doctype", r"<!doctype[^>]*>?", "keyword", re.IGNORECASE),
        TokenCategory("tag", r"</?[A-Za-z][\w:.-]*|/?>", "tag"),
        TokenCategory("attribute", r"(?<=\s)[A-Za-z_:@][\w:.-]*(?=\s*=)", "attribute"),
        TokenCategory("string", r"\"[^\"]*(?:\"|\Z)|'[^'\n<>]*'", "string"),
    ),
)

CSS = LanguageRule(
    key="css",
    aliases=("CSS", "scss"),
    extension=".css",
    categories=(
        TokenCategory("comment", r"/\*[\s\S]*?(?:\*/|\Z)", "comment"),
        TokenCategory("string", DQ_STRING + "|" + SQ_STRING, "string"),
        TokenCategory("at_rule", r"@[\w-]+", "keyword"),
        TokenCategory("important", r"!important\b", "keyword"),
        TokenCategory("color", r"#[0-9a-fA-F]{3,8}\b(?![\w-])", "number"),
        TokenCategory("property", r"(?<![\w-])[A-Za-z-][\w-]*(?=\s*:[^:])", "attribute"),
        TokenCategory("selector", r"[.#][A-Za-z_-][\w-]*", "tag"),
        TokenCategory("number", r"(?<![\w-])-?\d*\.?\d+(?:%|[A-Za-z]+)?", "number"),
    ),
)

# Registration order matters: the first rule is the fallback.
BUILTIN_RULES: tuple[LanguageRule, ...] = (
    JAVA, PYTHON, JAVASCRIPT, CPP, CSHARP, SQL, HTML, CSS,
)
