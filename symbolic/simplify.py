#! /usr/bin/env python3

import logging
from collections import Counter
from dataclasses import dataclass
from functools import reduce

from .mathobj import (
    AssociativeOperation, Constant, Decimal, Division, Empty, Integer,
    MathObject, Negation, Parentheses, Product, Sum, add, from_terms,
    make_product, make_sum, multiply,
)
from .numeric import is_divisible

log = logging.getLogger(__name__)

MAX_STEPS = 64


@dataclass(frozen=True)
class FactorizedExpression:
    """`factor * operand + remainder`, an equivalent rewriting of a sum."""
    factor: MathObject
    operand: MathObject
    remainder: MathObject = Empty

    def expression(self):
        return make_sum([Product.join(self.factor, self.operand),
                         self.remainder])


def complexity(expr):
    return expr.complexity()


def _merged(element_type, terms):
    merged = []
    for term in terms:
        if isinstance(term, element_type):
            merged.extend(term.terms)
        else:
            merged.append(term)
    return merged


def flatten(expr):
    if isinstance(expr, AssociativeOperation):
        element_type = type(expr)
        return from_terms(_merged(element_type, map(flatten, expr.terms)),
                          element_type)
    elif isinstance(expr, Negation):
        return Negation(flatten(expr.operand))
    elif isinstance(expr, Division):
        return Division(flatten(expr.left), flatten(expr.right))
    elif isinstance(expr, Parentheses):
        return flatten(expr.inner)
    return expr


def expand(expr):
    if isinstance(expr, Negation):
        return expand(Product(Integer(-1), expr.operand))
    elif isinstance(expr, Sum):
        return make_sum(_merged(Sum, map(expand, expr.terms)))
    elif isinstance(expr, Product):
        partials = [[]]
        for factor in map(expand, expr.terms):
            if isinstance(factor, Sum):
                partials = [partial + [term]
                            for term in factor.terms
                            for partial in partials]
            else:
                partials = [partial + [factor] for partial in partials]
        return make_sum([make_product(_merged(Product, partial))
                         for partial in partials])
    elif isinstance(expr, Division):
        return Division(expand(expr.left), expand(expr.right))
    elif isinstance(expr, Parentheses):
        return expand(expr.inner)
    return expr


def _fold_constants(element_type, terms, fold, is_identity):
    constants = [term for term in terms if isinstance(term, Constant)]
    others = [term for term in terms if not isinstance(term, Constant)]

    constant = reduce(fold, constants, Empty)
    if others and isinstance(constant, Constant) and is_identity(constant):
        constant = Empty
    return from_terms([constant] + others, element_type)


def combine_terms(expr):
    if isinstance(expr, Negation):
        return combine_terms(Product(Integer(-1), expr.operand))
    elif isinstance(expr, Sum):
        terms = _merged(Sum, map(combine_terms, expr.terms))
        return _fold_constants(Sum, terms, add, Constant.is_zero)
    elif isinstance(expr, Product):
        terms = _merged(Product, map(combine_terms, expr.terms))
        if any(isinstance(term, Constant) and term.is_zero() for term in terms):
            return Integer(0)
        return _fold_constants(Product, terms, multiply, Constant.is_one)
    elif isinstance(expr, Division):
        return reduce_division(Division(combine_terms(expr.left),
                                        combine_terms(expr.right)))
    elif isinstance(expr, Parentheses):
        return combine_terms(expr.inner)
    return expr


def reduce_division(division):
    """Evaluate a division of two constants where the result is exact;
    otherwise return `division` itself."""
    left, right = division.left, division.right
    if isinstance(left, Integer) and isinstance(right, Integer):
        if is_divisible(left.value, right.value):
            return Integer(left.value // right.value)
    elif isinstance(left, Constant) and isinstance(right, Constant):
        if not right.is_zero():
            return Decimal(left.value / right.value)
    return division


def simplify_division(division):
    reduced = reduce_division(division)
    if reduced is not division:
        return reduced

    simplified = Division(simplify(division.left), simplify(division.right))
    if simplified != division:
        return reduce_division(simplified)
    return division


def _divide_out(term, powers, leftovers):
    """Remove `powers` from the factors of `term`, appending what is not
    removed to `leftovers`. Returns whether an odd number of negations was
    passed on the way."""
    if isinstance(term, Negation):
        return not _divide_out(term.operand, powers, leftovers)
    if isinstance(term, Product):
        negated = False
        for factor in term.terms:
            negated ^= _divide_out(factor, powers, leftovers)
        return negated

    if powers[term] > 0:
        powers[term] -= 1
    else:
        leftovers.append(term)
    return False


def divide_out(term, powers):
    leftovers = []
    negated = _divide_out(term, Counter(powers), leftovers)
    quotient = make_product(leftovers)
    if quotient is Empty:
        quotient = Integer(1)
    return Negation(quotient) if negated else quotient


def factors(expr):
    if not isinstance(expr, Sum):
        return []

    terms = expr.terms
    term_factors = [Counter(term.iter_factors()) for term in terms]

    candidates = {}
    for counter in term_factors:
        for factor in counter:
            candidates.setdefault(factor, None)

    # Factors found in exactly the same terms leave the same remainder, so
    # they are taken out together.
    groups = {}
    for factor in candidates:
        containing = tuple(i for i, counter in enumerate(term_factors)
                           if factor in counter)
        groups.setdefault(containing, []).append(factor)

    factorizations = []
    for containing, members in groups.items():
        powers = Counter({
            factor: min(term_factors[i][factor] for i in containing)
            for factor in members
        })
        factorizations.append(FactorizedExpression(
            make_product(list(powers.elements())),
            make_sum([divide_out(terms[i], powers) for i in containing]),
            make_sum([term for i, term in enumerate(terms)
                      if i not in containing]),
        ))
    return factorizations


def _collect_sum(expr):
    candidates = [combine_terms(make_sum([collect(t) for t in expr.terms]))]

    for factorization in factors(expr):
        # A factor of a single term gives back that same term.
        if not isinstance(factorization.operand, Sum):
            continue
        collected = FactorizedExpression(
            factorization.factor,
            collect(factorization.operand),
            collect(factorization.remainder),
        )
        candidates.append(combine_terms(collected.expression()))

    return min(candidates, key=complexity)


def collect(expr):
    if isinstance(expr, Sum):
        return _collect_sum(expr)
    elif isinstance(expr, Product):
        return make_product(_merged(Product, map(collect, expr.terms)))
    elif isinstance(expr, Negation):
        return Negation(collect(expr.operand))
    elif isinstance(expr, Division):
        return Division(collect(expr.left), collect(expr.right))
    elif isinstance(expr, Parentheses):
        return collect(expr.inner)
    return expr


def simplify_divisions(expr):
    """Run `simplify_division` on every division in `expr`, outermost
    first."""
    if isinstance(expr, Division):
        return simplify_division(expr)
    elif isinstance(expr, AssociativeOperation):
        return type(expr)(*map(simplify_divisions, expr.terms))
    elif isinstance(expr, Negation):
        return Negation(simplify_divisions(expr.operand))
    elif isinstance(expr, Parentheses):
        return simplify_divisions(expr.inner)
    return expr


def _simplify_step(expr):
    flat = simplify_divisions(flatten(expr))
    if isinstance(flat, Division):
        return flat

    direct = combine_terms(flat)
    collected = combine_terms(collect(expand(flat)))
    best = min((direct, collected), key=complexity)
    log.debug('simplify %r: direct %d, collected %d', expr,
              complexity(direct), complexity(collected))
    return combine_terms(best)


def _canonical(expr):
    return complexity(expr), repr(expr)


def simplify(expr):
    """Repeat the simplification step until it reproduces a tree seen
    before. The result is the simplest tree of that final cycle, which is
    usually a single fixed point."""
    history = []
    current = expr
    while current not in history:
        if len(history) == MAX_STEPS:
            log.warning('simplify %r: no fixed point after %d steps',
                        expr, MAX_STEPS)
            return min(history, key=_canonical)
        history.append(current)
        current = _simplify_step(current)

    cycle = history[history.index(current):]
    return min(cycle, key=_canonical)
