"""
Price formula expressions.

Service options describe their surcharge as a small arithmetic formula over
the customer's selected value, for example ``+3+([value]*2)`` or ``+5+[value]``.
Formulas are parsed into a typed AST and evaluated with Decimal arithmetic;
nothing is ever handed to ``eval``.

Grammar::

    expression := term (('+' | '-') term)*
    term       := unary (('*' | '/') unary)*
    unary      := ('+' | '-') unary | primary
    primary    := NUMBER | '[value]' | '(' expression ')'

Example:
    >>> parse_formula('+3+([value]*2)').evaluate(Decimal('5'))
    Decimal('13')
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

VARIABLE = '[value]'

# Formulas are short admin-entered strings; anything longer is a mistake.
MAX_FORMULA_LENGTH = 200

_TOKEN_RE = re.compile(r'\s*(?:(\d+(?:\.\d+)?|\.\d+)|(\[value\])|(.))')


class FormulaError(ValueError):
    """Formula could not be parsed or evaluated."""
    pass


@dataclass(frozen=True)
class Number:
    value: Decimal

    def evaluate(self, variable: Decimal) -> Decimal:
        return self.value


@dataclass(frozen=True)
class Variable:

    def evaluate(self, variable: Decimal) -> Decimal:
        return variable


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: 'Node'

    def evaluate(self, variable: Decimal) -> Decimal:
        value = self.operand.evaluate(variable)
        return -value if self.op == '-' else value


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: 'Node'
    right: 'Node'

    def evaluate(self, variable: Decimal) -> Decimal:
        left = self.left.evaluate(variable)
        right = self.right.evaluate(variable)
        if self.op == '+':
            return left + right
        if self.op == '-':
            return left - right
        if self.op == '*':
            return left * right
        if right == 0:
            raise FormulaError('Division by zero')
        return left / right


Node = Union[Number, Variable, UnaryOp, BinaryOp]


def tokenize(formula: str) -> list:
    """Split a formula into number, variable and operator tokens."""
    tokens = []
    for number, variable, symbol in _TOKEN_RE.findall(formula):
        if number:
            tokens.append(('number', number))
        elif variable:
            tokens.append(('variable', variable))
        elif symbol.strip():
            if symbol not in '+-*/()':
                raise FormulaError(f'Unexpected character {symbol!r}')
            tokens.append(('op', symbol))
    return tokens


class _Parser:
    """Recursive-descent parser producing the AST for one formula."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0

    def peek(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def take(self):
        token = self.peek()
        if token is None:
            raise FormulaError('Unexpected end of formula')
        self.pos += 1
        return token

    def parse(self) -> Node:
        node = self.expression()
        if self.peek() is not None:
            raise FormulaError(f'Unexpected token {self.peek()[1]!r}')
        return node

    def expression(self) -> Node:
        node = self.term()
        while self.peek() in (('op', '+'), ('op', '-')):
            op = self.take()[1]
            node = BinaryOp(op, node, self.term())
        return node

    def term(self) -> Node:
        node = self.unary()
        while self.peek() in (('op', '*'), ('op', '/')):
            op = self.take()[1]
            node = BinaryOp(op, node, self.unary())
        return node

    def unary(self) -> Node:
        if self.peek() in (('op', '+'), ('op', '-')):
            op = self.take()[1]
            return UnaryOp(op, self.unary())
        return self.primary()

    def primary(self) -> Node:
        kind, text = self.take()
        if kind == 'number':
            return Number(Decimal(text))
        if kind == 'variable':
            return Variable()
        if text == '(':
            node = self.expression()
            if self.take() != ('op', ')'):
                raise FormulaError('Missing closing parenthesis')
            return node
        raise FormulaError(f'Unexpected token {text!r}')


def parse_formula(formula: str) -> Node:
    """
    Parse a price formula into an AST.

    Raises:
        FormulaError: If the formula is empty, too long or malformed
    """
    if not formula or not formula.strip():
        raise FormulaError('Formula is empty')
    if len(formula) > MAX_FORMULA_LENGTH:
        raise FormulaError('Formula is too long')
    return _Parser(tokenize(formula)).parse()


def evaluate_formula(formula: str, value) -> Decimal:
    """Parse ``formula`` and evaluate it with ``[value]`` bound to ``value``."""
    try:
        variable = Decimal(str(value))
    except InvalidOperation:
        raise FormulaError(f'Invalid value {value!r}')
    tree = parse_formula(formula)
    try:
        return tree.evaluate(variable)
    except ArithmeticError as e:
        # Decimal overflow
        raise FormulaError(f'Cannot evaluate formula: {e!r}') from e
