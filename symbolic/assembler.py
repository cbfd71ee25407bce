#! /usr/bin/env python3

import logging

from . import tokens
from .mathobj import Decimal, Empty, Integer, MathObject, Negation, Variable
from .tokenizer import tokenize
from .tokens import Operator, Paren

log = logging.getLogger(__name__)


class AssemblyError(SyntaxError):
    pass


class MismatchedParenthesisError(AssemblyError):
    def __init__(self, message='Mismatched parenthesis'):
        super().__init__(message)


def operand_from_token(token):
    if isinstance(token, tokens.Integer):
        return Integer(token.value)
    elif isinstance(token, tokens.Decimal):
        return Decimal(token.value)
    elif isinstance(token, tokens.Name):
        return Variable(token.value)
    raise AssemblyError(f'Not an operand: {token!r}')


def ends_operand(token):
    return tokens.is_operand(token) or token is Paren.RIGHT


def starts_operand(token):
    return (tokens.is_operand(token) or token is Paren.LEFT
            or isinstance(token, Operator) and token.unary)


def check_operands(operator, previous, following):
    """Raise if the neighbours of a binary `operator` leave it without a
    left or right hand operand."""
    has_left = ends_operand(previous)
    has_right = starts_operand(following)
    if has_left and has_right:
        return

    stem = f'Can not apply binary operator {operator.symbol}'
    if not has_left and not has_right:
        raise AssemblyError(f'{stem} without operands.')
    elif not has_left:
        raise AssemblyError(f'{stem} with no left hand operand.')
    raise AssemblyError(f'{stem} with no right hand operand.')


def apply_operator(operator, operands):
    """Pop the operands of `operator` off the `operands` stack and push the
    resulting expression."""
    if operator.unary:
        if not operands:
            raise AssemblyError(
                f'Can not apply operator {operator.symbol} without operand.'
            )
        operand = operands.pop()
        if operator is Operator.UNARY_MINUS:
            operand = Negation.from_operand(operand)
        operands.append(operand)
        return

    # The left hand operand was pushed first, so a short stack is missing
    # the right one.
    stem = f'Can not apply binary operator {operator.symbol}'
    if not operands:
        raise AssemblyError(f'{stem} without operands.')
    elif len(operands) == 1:
        raise AssemblyError(f'{stem} with no right hand operand.')
    right = operands.pop()
    left = operands.pop()

    if operator is Operator.MINUS:
        operator, right = Operator.PLUS, Negation(right)
    obj_type = MathObject.operation_types[operator]
    operands.append(obj_type.from_operands(left, right))


def assemble(token_list):
    # Shunting-yard: `stack` holds pending operators and parenthesis
    # barriers, `operands` the expressions built so far.
    stack = []
    operands = []

    padded = [None, *token_list, None]
    for previous, token, following in zip(padded, padded[1:], padded[2:]):
        if tokens.is_operand(token):
            operands.append(operand_from_token(token))
        elif isinstance(token, Operator):
            if not token.unary:
                check_operands(token, previous, following)
            while stack and token.binds_before(stack[-1]):
                apply_operator(stack.pop(), operands)
            stack.append(token)
        elif token is Paren.LEFT:
            stack.append(token)
        elif token is Paren.RIGHT:
            while stack and stack[-1] is not Paren.LEFT:
                apply_operator(stack.pop(), operands)
            if not stack:
                raise MismatchedParenthesisError()
            stack.pop()
        else:
            raise AssemblyError(f'Unexpected token: {token!r}')

    while stack:
        token = stack.pop()
        if isinstance(token, Paren):
            raise MismatchedParenthesisError()
        apply_operator(token, operands)

    if not operands:
        return Empty
    if len(operands) > 1:
        raise AssemblyError(
            'Unexpected error: result is not a single expression.'
        )

    result = operands.pop()
    log.debug('assembled %r', result)
    return result


def parse(string):
    return assemble(tokenize(string))
