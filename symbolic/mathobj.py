#! /usr/bin/env python3

from .tokens import Operator


def from_terms(iterable, element_type):
    """Build an `element_type` node out of the non-empty terms of `iterable`,
    collapsing a single term to itself and no terms to `Empty`."""
    terms = [term for term in iterable if not isinstance(term, EmptyExpression)]

    if not terms:
        return Empty
    if len(terms) == 1:
        return terms[0]
    return element_type(*terms)


def make_sum(terms):
    return from_terms(terms, Sum)


def make_product(terms):
    return from_terms(terms, Product)


def add(a, b):
    if isinstance(a, EmptyExpression):
        return b
    if isinstance(b, EmptyExpression):
        return a
    if isinstance(a, Integer) and isinstance(b, Integer):
        return Integer(a.value + b.value)
    if isinstance(a, Constant) and isinstance(b, Constant):
        return Decimal(a.value + b.value)
    return Sum.join(a, b)


def multiply(a, b):
    if isinstance(a, EmptyExpression):
        return b
    if isinstance(b, EmptyExpression):
        return a
    if isinstance(a, Integer) and isinstance(b, Integer):
        return Integer(a.value * b.value)
    if isinstance(a, Constant) and isinstance(b, Constant):
        return Decimal(a.value * b.value)
    return Product.join(a, b)


def parenthesize(expr, precedence, *, inclusive=False):
    """Wrap `expr` if it is an operator binding looser than `precedence`
    (or as loose, when `inclusive`)."""
    if not isinstance(expr, BinaryOperation):
        return expr
    if (expr.precedence < precedence
            or inclusive and expr.precedence == precedence):
        return Parentheses(expr)
    return expr


class MathObject:
    operation_types = {}
    operator = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if getattr(cls, 'operator', None) is not None:
            MathObject.operation_types[cls.operator] = cls

    @classmethod
    def parse(cls, string):
        from .assembler import parse
        return parse(string)

    @classmethod
    def fromobj(cls, obj):
        if isinstance(obj, MathObject):
            return obj
        elif isinstance(obj, bool):
            raise TypeError(f'Unknown object type: {type(obj)}')
        elif isinstance(obj, int):
            return Integer(obj)
        elif isinstance(obj, float):
            return Decimal(obj)
        elif isinstance(obj, str):
            try:
                return MathObject.parse(obj)
            except SyntaxError:
                return Variable(obj)
        raise TypeError(f'Unknown object type: {type(obj)}')

    def __add__(self, b):
        return add(self, MathObject.fromobj(b))

    def __radd__(self, a):
        return add(MathObject.fromobj(a), self)

    def __sub__(self, b):
        return add(self, Negation(MathObject.fromobj(b)))

    def __rsub__(self, a):
        return add(MathObject.fromobj(a), Negation(self))

    def __mul__(self, b):
        return multiply(self, MathObject.fromobj(b))

    def __rmul__(self, a):
        return multiply(MathObject.fromobj(a), self)

    def __truediv__(self, b):
        return Division(self, MathObject.fromobj(b))

    def __rtruediv__(self, a):
        return Division(MathObject.fromobj(a), self)

    def __neg__(self):
        return Negation(self)

    def iter_factors(self):
        """Yield the non-constant factors this term is a product of."""
        yield self

    def flatten(self):
        from .simplify import flatten
        return flatten(self)

    def expand(self):
        from .simplify import expand
        return expand(self)

    def collect(self):
        from .simplify import collect
        return collect(self)

    def combine_terms(self):
        from .simplify import combine_terms
        return combine_terms(self)

    def simplify(self):
        from .simplify import simplify
        return simplify(self)

    def text(self):
        raise NotImplementedError

    def complexity(self):
        raise NotImplementedError

    def evaluate(self, values=None):
        raise NotImplementedError

    def __str__(self):
        return self.text()


class EmptyExpression(MathObject):
    def text(self):
        return ''

    def complexity(self):
        return 0

    def evaluate(self, values=None):
        return 0

    def iter_factors(self):
        return iter(())

    def __eq__(self, other):
        if not isinstance(other, MathObject):
            return NotImplemented
        return isinstance(other, EmptyExpression)

    def __hash__(self):
        return hash(EmptyExpression)

    def __repr__(self):
        return 'Empty'


Empty = EmptyExpression()


class Constant(MathObject):
    def __init__(self, value):
        self._value = value

    @property
    def value(self):
        return self._value

    def is_zero(self):
        return self.value == 0

    def is_one(self):
        return self.value == 1

    def is_negative(self):
        return self.value < 0

    def __abs__(self):
        return type(self)(abs(self.value))

    def iter_factors(self):
        return iter(())

    def complexity(self):
        return 1

    def evaluate(self, values=None):
        return self.value

    def __eq__(self, other):
        if not isinstance(other, MathObject):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f'{type(self).__name__}({self.value!r})'


class Integer(Constant):
    def __init__(self, value: int):
        if isinstance(value, Integer):
            value = value.value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'Integer needs an int, not {type(value)}')
        super().__init__(value)

    def text(self):
        return str(self.value)


class Decimal(Constant):
    def __init__(self, value: float):
        if isinstance(value, Constant):
            value = value.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f'Decimal needs a float, not {type(value)}')
        super().__init__(float(value))

    def text(self):
        return repr(self.value)


class Variable(MathObject):
    def __init__(self, name: str):
        self._name = name

    @property
    def name(self):
        return self._name

    def text(self):
        return self.name

    def complexity(self):
        return 2

    def evaluate(self, values=None):
        try:
            return (values or {})[self.name]
        except KeyError:
            raise KeyError(f'No value given for variable {self.name!r}') \
                from None

    def __eq__(self, other):
        if not isinstance(other, MathObject):
            return NotImplemented
        return isinstance(other, Variable) and self.name == other.name

    def __hash__(self):
        return hash(('Variable', self.name))

    def __repr__(self):
        return f'Variable({self.name!r})'


class Parentheses(MathObject):
    def __init__(self, inner: MathObject):
        self._inner = inner

    @property
    def inner(self):
        return self._inner

    def text(self):
        return f'({self.inner.text()})'

    def complexity(self):
        return self.inner.complexity()

    def evaluate(self, values=None):
        return self.inner.evaluate(values)

    def __eq__(self, other):
        if not isinstance(other, MathObject):
            return NotImplemented
        return isinstance(other, Parentheses) and self.inner == other.inner

    def __hash__(self):
        return hash(('Parentheses', self.inner))

    def __repr__(self):
        return f'Parentheses({self.inner!r})'


class Operation(MathObject):
    @property
    def precedence(self):
        return self.operator.precedence


class Negation(Operation):
    operator = Operator.UNARY_MINUS

    def __init__(self, operand: MathObject):
        self._operand = MathObject.fromobj(operand)

    @classmethod
    def from_operand(cls, operand):
        return cls(operand)

    @property
    def operand(self):
        return self._operand

    def iter_factors(self):
        yield from self.operand.iter_factors()

    def text(self):
        operand = parenthesize(self.operand, self.precedence)
        return f'-{operand.text()}'

    def complexity(self):
        return 1 + self.operand.complexity()

    def evaluate(self, values=None):
        return -self.operand.evaluate(values)

    def __eq__(self, other):
        if not isinstance(other, MathObject):
            return NotImplemented
        return isinstance(other, Negation) and self.operand == other.operand

    def __hash__(self):
        return hash(('Negation', self.operand))

    def __repr__(self):
        return f'Negation({self.operand!r})'


class BinaryOperation(Operation):
    pass


class Division(BinaryOperation):
    operator = Operator.DIVIDE

    def __init__(self, left: MathObject, right: MathObject):
        self._left = MathObject.fromobj(left)
        self._right = MathObject.fromobj(right)

    @classmethod
    def from_operands(cls, left, right):
        return cls(left, right)

    @property
    def left(self):
        return self._left

    @property
    def right(self):
        return self._right

    def text(self):
        left = parenthesize(self.left, self.precedence)
        right = parenthesize(self.right, self.precedence, inclusive=True)
        return f'{left.text()} / {right.text()}'

    def complexity(self):
        return self.left.complexity() + self.right.complexity() + 1

    def evaluate(self, values=None):
        return self.left.evaluate(values) / self.right.evaluate(values)

    def __eq__(self, other):
        if not isinstance(other, MathObject):
            return NotImplemented
        return (isinstance(other, Division)
                and self.left == other.left and self.right == other.right)

    def __hash__(self):
        return hash(('Division', self.left, self.right))

    def __repr__(self):
        return f'Division({self.left!r}, {self.right!r})'


class AssociativeOperation(BinaryOperation):
    operator_cost = 1

    def __init__(self, *terms):
        if len(terms) < 2:
            raise ValueError(f'{type(self).__name__} needs at least two '
                             f'terms, got {len(terms)}')
        self._terms = tuple(MathObject.fromobj(t) for t in terms)

    @classmethod
    def join(cls, a, b):
        """Combine two operands without nesting an operation of the same
        kind inside the result."""
        terms = []
        for operand in (a, b):
            if isinstance(operand, cls):
                terms.extend(operand.terms)
            else:
                terms.append(operand)
        return cls(*terms)

    from_operands = join

    @property
    def terms(self):
        return self._terms

    def complexity(self):
        return (sum(term.complexity() for term in self.terms)
                + self.operator_cost * (len(self.terms) - 1))

    def __eq__(self, other):
        if not isinstance(other, MathObject):
            return NotImplemented
        return type(self) is type(other) and self.terms == other.terms

    def __hash__(self):
        return hash((type(self).__name__, self.terms))

    def __repr__(self):
        terms = ', '.join(repr(term) for term in self.terms)
        return f'{type(self).__name__}({terms})'


class Sum(AssociativeOperation):
    operator = Operator.PLUS
    operator_cost = 2

    def text(self):
        first, *rest = self.terms
        parts = [parenthesize(first, self.precedence).text()]

        for term in rest:
            subtracted = _subtracted_part(term)
            if subtracted is not None:
                subtracted = parenthesize(subtracted, self.precedence,
                                          inclusive=True)
                parts.append(f' - {subtracted.text()}')
            else:
                parts.append(f' + {parenthesize(term, self.precedence).text()}')
        return ''.join(parts)

    def evaluate(self, values=None):
        return sum(term.evaluate(values) for term in self.terms)


class Product(AssociativeOperation):
    operator = Operator.TIMES
    operator_cost = 1

    def iter_factors(self):
        for term in self.terms:
            yield from term.iter_factors()

    def text(self):
        first, *rest = self.terms
        if first == Integer(-1):
            rest = parenthesize(make_product(rest), self.precedence)
            return f'-{rest.text()}'
        return ' * '.join(parenthesize(term, self.precedence).text()
                          for term in self.terms)

    def evaluate(self, values=None):
        result = 1
        for term in self.terms:
            result *= term.evaluate(values)
        return result


def _subtracted_part(term):
    """For a term rendered after a minus sign inside a sum, return what
    follows the sign; None if the term is added."""
    if isinstance(term, Negation):
        return term.operand
    if isinstance(term, Constant) and term.is_negative():
        return abs(term)
    if (isinstance(term, Product) and isinstance(term.terms[0], Constant)
            and term.terms[0].is_negative()):
        coefficient = abs(term.terms[0])
        rest = list(term.terms[1:])
        if coefficient != Integer(1):
            rest.insert(0, coefficient)
        return make_product(rest)
    return None
