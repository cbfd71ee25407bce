import pytest

from symbolic.assembler import (
    AssemblyError, MismatchedParenthesisError, assemble, parse,
)
from symbolic.mathobj import (
    Decimal, Division, Empty, Integer, MathObject, Negation, Product, Sum,
    Variable,
)
from symbolic.tokenizer import tokenize

x = Variable('x')
y = Variable('y')
z = Variable('z')


def test_empty_input_gives_empty_expression():
    assert assemble(tokenize('')) is Empty


@pytest.mark.parametrize('string, expected', [
    ('3', Integer(3)),
    ('3.3', Decimal(3.3)),
    ('var', Variable('var')),
])
def test_single_operands(string, expected):
    assert assemble(tokenize(string)) == expected


@pytest.mark.parametrize('string, expected', [
    ('+2', Integer(2)),
    ('++3', Integer(3)),
    ('+x', x),
    ('-2', Negation(Integer(2))),
    ('-x', Negation(x)),
    ('-4.3', Negation(Decimal(4.3))),
    ('--3', Negation(Negation(Integer(3)))),
    ('+(x + y)', Sum(x, y)),
    ('-(x + y)', Negation(Sum(x, y))),
    ('2 * -x', Product(Integer(2), Negation(x))),
    ('-x * y', Product(Negation(x), y)),
])
def test_unary_operators(string, expected):
    assert parse(string) == expected


@pytest.mark.parametrize('string, expected', [
    ('1+2', Sum(Integer(1), Integer(2))),
    ('1*2', Product(Integer(1), Integer(2))),
    ('1-2', Sum(Integer(1), Negation(Integer(2)))),
    ('x/y', Division(x, y)),
    ('x-1', Sum(x, Negation(Integer(1)))),
])
def test_binary_operators(string, expected):
    assert parse(string) == expected


@pytest.mark.parametrize('string, expected', [
    ('x * y + 3 * z', Sum(Product(x, y), Product(Integer(3), z))),
    ('x * y - 3 * z',
     Sum(Product(x, y), Negation(Product(Integer(3), z)))),
    ('1 + 2 * 3', Sum(Integer(1), Product(Integer(2), Integer(3)))),
    ('(1 + 2) * 3', Product(Sum(Integer(1), Integer(2)), Integer(3))),
    ('(x + y) * (z + 1)', Product(Sum(x, y), Sum(z, Integer(1)))),
    ('(x)', x),
    ('(3)', Integer(3)),
    ('((5.4))', Decimal(5.4)),
])
def test_precedence_and_parentheses(string, expected):
    assert parse(string) == expected


def test_associative_operators_are_flattened():
    assert parse('1 + 2 + 3') == Sum(Integer(1), Integer(2), Integer(3))
    assert parse('1 + (2 + 3)') == Sum(Integer(1), Integer(2), Integer(3))
    assert parse('2 * 3 * x') == Product(Integer(2), Integer(3), x)
    assert parse('1 - 2 - 3') == Sum(
        Integer(1), Negation(Integer(2)), Negation(Integer(3))
    )


def test_division_is_left_associative():
    assert parse('8 / 4 / 2') == Division(
        Division(Integer(8), Integer(4)), Integer(2)
    )
    assert parse('8 / (4 / 2)') == Division(
        Integer(8), Division(Integer(4), Integer(2))
    )


@pytest.mark.parametrize('string', [
    '(', ')', '(1+2', '1+2)', '2 * (1 + 3', '2 * 1 + 3)', '(()',
])
def test_mismatched_parentheses(string):
    with pytest.raises(MismatchedParenthesisError):
        parse(string)


@pytest.mark.parametrize('string', [
    '1-', '1+', '1*', '1/', '*1', '/1', '-', '1 * * 2',
])
def test_missing_operands(string):
    with pytest.raises(AssemblyError):
        parse(string)


def test_missing_operand_messages():
    with pytest.raises(AssemblyError, match='no left hand operand'):
        parse('*1')
    with pytest.raises(AssemblyError, match='no left hand operand'):
        parse('(/ 2)')
    with pytest.raises(AssemblyError, match='no right hand operand'):
        parse('1-')
    with pytest.raises(AssemblyError, match='no right hand operand'):
        parse('1 * * 2')
    with pytest.raises(AssemblyError, match='no right hand operand'):
        parse('(1 +) * 2')
    with pytest.raises(AssemblyError, match='no right hand operand'):
        parse('x - ()')
    with pytest.raises(AssemblyError, match='without operands'):
        parse('*')
    with pytest.raises(AssemblyError, match='without operand'):
        parse('-')


def test_leftover_operands():
    with pytest.raises(AssemblyError, match='not a single expression'):
        parse('1 2')


def test_mismatched_parenthesis_is_an_assembly_error():
    with pytest.raises(AssemblyError):
        parse('(1')


def test_fromobj_parses_strings():
    assert MathObject.fromobj('2 * x') == Product(Integer(2), x)
    assert MathObject.fromobj('x$') == Variable('x$')
    assert MathObject.fromobj(3) == Integer(3)
    assert MathObject.fromobj(0.5) == Decimal(0.5)
    with pytest.raises(TypeError):
        MathObject.fromobj([1])
