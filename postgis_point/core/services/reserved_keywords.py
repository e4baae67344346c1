"""
Reserved keywords — names a generated field may not take.

A point field named ``foo`` becomes a Java attribute, a getter/setter
pair and, on the client side, a TypeScript model property.  Any name that
is a keyword in one of those targets produces uncompilable code.

Lookups are case-insensitive.
"""

from __future__ import annotations

_JAVA = frozenset({
    "ABSTRACT", "ASSERT", "BOOLEAN", "BREAK", "BYTE", "CASE", "CATCH",
    "CHAR", "CLASS", "CONST", "CONTINUE", "DEFAULT", "DO", "DOUBLE",
    "ELSE", "ENUM", "EXTENDS", "FINAL", "FINALLY", "FLOAT", "FOR",
    "GOTO", "IF", "IMPLEMENTS", "IMPORT", "INSTANCEOF", "INT",
    "INTERFACE", "LONG", "NATIVE", "NEW", "PACKAGE", "PRIVATE",
    "PROTECTED", "PUBLIC", "RETURN", "SHORT", "STATIC", "STRICTFP",
    "SUPER", "SWITCH", "SYNCHRONIZED", "THIS", "THROW", "THROWS",
    "TRANSIENT", "TRY", "VOID", "VOLATILE", "WHILE", "TRUE", "FALSE",
    "NULL", "VAR",
})

_TYPESCRIPT = frozenset({
    "BREAK", "CASE", "CATCH", "CLASS", "CONST", "CONTINUE", "DEBUGGER",
    "DEFAULT", "DELETE", "DO", "ELSE", "ENUM", "EXPORT", "EXTENDS",
    "FALSE", "FINALLY", "FOR", "FUNCTION", "IF", "IMPORT", "IN",
    "INSTANCEOF", "NEW", "NULL", "RETURN", "SUPER", "SWITCH", "THIS",
    "THROW", "TRUE", "TRY", "TYPEOF", "VAR", "VOID", "WHILE", "WITH",
    "AS", "IMPLEMENTS", "INTERFACE", "LET", "PACKAGE", "PRIVATE",
    "PROTECTED", "PUBLIC", "STATIC", "YIELD", "ANY", "BOOLEAN",
    "CONSTRUCTOR", "DECLARE", "GET", "MODULE", "REQUIRE", "NUMBER",
    "SET", "STRING", "SYMBOL", "TYPE", "FROM", "OF", "AWAIT", "ASYNC",
})

_ANGULAR = frozenset({
    "COMPONENT", "DIRECTIVE", "INJECTABLE", "INPUT", "OUTPUT", "PIPE",
    "NGMODULE", "NGONINIT", "NGONDESTROY", "NGONCHANGES", "NGDOCHECK",
    "NGAFTERVIEWINIT", "NGAFTERCONTENTINIT", "VIEWCHILD", "HOSTLISTENER",
    "HOSTBINDING", "EVENTEMITTER", "ELEMENTREF", "TEMPLATEREF",
})

_LANGUAGES: dict[str, frozenset[str]] = {
    "java": _JAVA,
    "typescript": _TYPESCRIPT,
    "angular": _ANGULAR,
}


def is_reserved(name: str, language: str) -> bool:
    """True when ``name`` is reserved in the given target language."""
    keywords = _LANGUAGES.get(language.lower())
    if keywords is None:
        raise ValueError(f"Unknown language: {language!r}")
    return name.upper() in keywords


def is_reserved_field_name(name: str) -> bool:
    """True when ``name`` is reserved in any generated target."""
    return any(is_reserved(name, lang) for lang in _LANGUAGES)


def supported_languages() -> list[str]:
    return sorted(_LANGUAGES)
