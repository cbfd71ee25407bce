#! /usr/bin/env python3

import logging
import re

from . import tokens
from .tokens import FIXED_TOKENS, Paren

log = logging.getLogger(__name__)

NAME = re.compile(r'[A-Za-z][A-Za-z0-9]*')
INTEGER = re.compile(r'[0-9]+')
DECIMAL = re.compile(r'[0-9]*[.][0-9]+')


class TokenizationError(SyntaxError):
    def __init__(self, remaining):
        super().__init__(f'Invalid token {remaining!r}')
        self.remaining = remaining


def parse_single_token(string):
    token = FIXED_TOKENS.get(string)
    if token is not None:
        return token
    if NAME.fullmatch(string):
        return tokens.Name(string)
    if INTEGER.fullmatch(string):
        return tokens.Integer(int(string))
    if DECIMAL.fullmatch(string):
        return tokens.Decimal(float(string))
    return None


def longest_token(string):
    """Return the longest valid token at the start of `string` together with
    the unconsumed rest, or None if no prefix is a token."""
    best = None
    for length in range(1, len(string) + 1):
        token = parse_single_token(string[:length])
        if token is not None:
            best = token, string[length:]
    return best


def resolve_unary_operators(token_list):
    resolved = []
    previous = None
    for token in token_list:
        if isinstance(token, tokens.Operator) and not (
                tokens.is_operand(previous) or previous is Paren.RIGHT):
            token = token.as_unary()
        resolved.append(token)
        previous = token
    return resolved


def tokenize(string):
    token_list = []
    remaining = string.lstrip()
    while remaining:
        result = longest_token(remaining)
        if result is None:
            raise TokenizationError(remaining)
        token, remaining = result
        token_list.append(token)
        remaining = remaining.lstrip()

    token_list = resolve_unary_operators(token_list)
    log.debug('tokenized %r into %r', string, token_list)
    return token_list
