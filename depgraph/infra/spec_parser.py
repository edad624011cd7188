"""
Parser for exheres-style DEPENDENCIES strings.

Translates dependency text into a DependencySpecTree.

Grammar:
    sequence    := item*
    item        := label | group | choice | conditional | blocker | package | set
    label       := name ('+' name)* ':'          build:  build+run:  test:
    group       := '(' sequence ')'
    choice      := '||' '(' sequence ')'
    conditional := ['!'] flag '?' '(' sequence ')'
    blocker     := '!' package
    package     := [op] category '/' name [version] [':' slot] ['::' repo] ['[' ... ']']
    set         := word without '/'

Annotation blocks ([[ ... ]]) are skipped.

Examples:
    build: dev-util/pkg-config build+run: sys-libs/zlib[>=1.2]
    ssl? ( dev-libs/openssl ) test: dev-python/pytest
    || ( dev-lang/python:3.11 dev-lang/python:3.12 )
"""

import re
from typing import List, Tuple

from ..domain.depspec import (
    AllOf,
    Conditional,
    DependencySpecTree,
    Labels,
    NamedSet,
    NoDependency,
    PackageDep,
)


class DependencySpecParseError(ValueError):
    """Error while parsing a DEPENDENCIES string."""
    pass


CHOICE_PREDICATE = "||"

_TOKEN_RE = re.compile(r"\[\[|\]\]|\|\||[()]|[^\s()]+")
_LABEL_RE = re.compile(r"^[A-Za-z0-9_-]+(\+[A-Za-z0-9_-]+)*:$")
_FLAG_RE = re.compile(r"^!?[A-Za-z0-9_@.+:-]+(\[[^\]]*\])?\?$")
_PACKAGE_RE = re.compile(
    r"^(?P<op>[<>]=?|=|~)?"
    r"(?P<category>[A-Za-z0-9_+][A-Za-z0-9_+.-]*)/"
    r"(?P<body>[^:\[]+)"
)
_NAME_RE = re.compile(r"^[A-Za-z0-9_+][A-Za-z0-9_+-]*$")
_VERSION_SUFFIX_RE = re.compile(r"-(?:\d[^-]*|scm)(?:-r\d+)?$")


def parse_dependencies(text: str) -> AllOf:
    """
    Parse a DEPENDENCIES string.

    Args:
        text: Dependency specification text

    Returns:
        Top-level AllOf holding the parsed items in order

    Raises:
        DependencySpecParseError: On unbalanced groups or malformed items
    """
    tokens = _tokenize(text)
    children, pos = _parse_sequence(tokens, 0)
    if pos < len(tokens):
        raise DependencySpecParseError(f"Unexpected {tokens[pos]!r} at token {pos}")
    return AllOf(tuple(children))


def parse_package_reference(token: str) -> PackageDep:
    """
    Parse a single package reference such as ">=dev-lang/python-3.8:3[ssl]".

    Raises:
        DependencySpecParseError: If token is not a package reference
    """
    match = _PACKAGE_RE.match(token)
    if not match:
        raise DependencySpecParseError(f"Not a package reference: {token!r}")

    body = match.group('body').rstrip('*')
    if match.group('op'):
        body = _VERSION_SUFFIX_RE.sub('', body)

    if not _NAME_RE.match(body):
        raise DependencySpecParseError(f"Invalid package name in {token!r}")

    return PackageDep(match.group('category'), body, token)


def _tokenize(text: str) -> List[str]:
    """Split text into tokens, dropping [[ ... ]] annotation blocks."""
    tokens = []
    depth = 0
    for token in _TOKEN_RE.findall(text or ""):
        if token == '[[':
            depth += 1
        elif token == ']]':
            if depth == 0:
                raise DependencySpecParseError("Unbalanced ']]'")
            depth -= 1
        elif depth == 0:
            tokens.append(token)
    if depth:
        raise DependencySpecParseError("Unterminated '[[' annotation")
    return tokens


def _parse_sequence(
    tokens: List[str],
    pos: int
) -> Tuple[List[DependencySpecTree], int]:
    """Parse items until ')' or end of input. Returns (items, next position)."""
    items: List[DependencySpecTree] = []

    while pos < len(tokens):
        token = tokens[pos]

        if token == ')':
            break

        if token == '(':
            group, pos = _parse_group(tokens, pos)
            items.append(group)
            continue

        if token == CHOICE_PREDICATE:
            group, pos = _parse_group(tokens, pos + 1)
            items.append(Conditional(CHOICE_PREDICATE, group))
            continue

        if _LABEL_RE.match(token):
            items.append(Labels(frozenset(token[:-1].split('+'))))
            pos += 1
            continue

        if _FLAG_RE.match(token):
            group, pos = _parse_group(tokens, pos + 1)
            items.append(Conditional(token, group))
            continue

        if token.startswith('!'):
            # Blockers are not dependencies
            parse_package_reference(token.lstrip('!'))
            items.append(NoDependency())
            pos += 1
            continue

        if '/' in token:
            items.append(parse_package_reference(token))
        else:
            items.append(NamedSet(token))
        pos += 1

    return items, pos


def _parse_group(tokens: List[str], pos: int) -> Tuple[AllOf, int]:
    """Parse '(' sequence ')' starting at pos."""
    if pos >= len(tokens) or tokens[pos] != '(':
        found = tokens[pos] if pos < len(tokens) else 'end of input'
        raise DependencySpecParseError(f"Expected '(' but found {found!r}")

    children, pos = _parse_sequence(tokens, pos + 1)
    if pos >= len(tokens):
        raise DependencySpecParseError("Unbalanced '(': missing ')'")
    return AllOf(tuple(children)), pos + 1
