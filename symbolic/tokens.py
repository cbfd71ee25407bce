#! /usr/bin/env python3

from collections import namedtuple
from dataclasses import dataclass
from enum import Enum


class Associativity(Enum):
    LEFT = 'left'
    RIGHT = 'right'
    BOTH = 'both'


OperatorInfo = namedtuple('OperatorInfo',
                          'symbol precedence associativity arity')


class Operator(Enum):
    PLUS = 'plus'
    MINUS = 'minus'
    TIMES = 'times'
    DIVIDE = 'divide'
    UNARY_PLUS = 'unary plus'
    UNARY_MINUS = 'unary minus'

    @property
    def info(self):
        return OPERATORS[self]

    @property
    def symbol(self):
        return self.info.symbol

    @property
    def precedence(self):
        return self.info.precedence

    @property
    def unary(self):
        return self.info.arity == 1

    def binds_before(self, other):
        """Whether a stacked operator `other` has to be applied before
        `self` can be pushed."""
        if not isinstance(other, Operator):
            return False
        if self.info.associativity is Associativity.RIGHT:
            return self.precedence < other.precedence
        return self.precedence <= other.precedence

    def as_unary(self):
        return _UNARY.get(self, self)

    def __repr__(self):
        return f'Operator.{self.name}'


OPERATORS = {
    Operator.PLUS: OperatorInfo('+', 2, Associativity.BOTH, 2),
    Operator.MINUS: OperatorInfo('-', 2, Associativity.LEFT, 2),
    Operator.TIMES: OperatorInfo('*', 3, Associativity.BOTH, 2),
    Operator.DIVIDE: OperatorInfo('/', 3, Associativity.LEFT, 2),
    Operator.UNARY_PLUS: OperatorInfo('+', 9, Associativity.RIGHT, 1),
    Operator.UNARY_MINUS: OperatorInfo('-', 9, Associativity.RIGHT, 1),
}

_UNARY = {
    Operator.PLUS: Operator.UNARY_PLUS,
    Operator.MINUS: Operator.UNARY_MINUS,
}


class Paren(Enum):
    LEFT = '('
    RIGHT = ')'

    def __repr__(self):
        return f'Paren.{self.name}'


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Decimal:
    value: float


@dataclass(frozen=True)
class Name:
    value: str


FIXED_TOKENS = {
    '*': Operator.TIMES,
    '+': Operator.PLUS,
    '-': Operator.MINUS,
    '/': Operator.DIVIDE,
    '(': Paren.LEFT,
    ')': Paren.RIGHT,
}


def is_constant(token):
    return isinstance(token, (Integer, Decimal))


def is_operand(token):
    return is_constant(token) or isinstance(token, Name)
