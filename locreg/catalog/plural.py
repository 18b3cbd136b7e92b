# $Id$
#
# Plural-Forms header expressions
#

import logging
import operator
import re

import locreg.conf as conf

logger = logging.getLogger(__name__)


class PluralFormsError(Exception):
    pass


def _div(a, b):
    """C integer division: truncate toward zero, 0 on division by zero."""
    if b == 0:
        return 0
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        return -q
    return q

def _mod(a, b):
    """C remainder: sign of the dividend, 0 on division by zero."""
    if b == 0:
        return 0
    return a - b * _div(a, b)


# Binary operators by precedence level, loosest first
_levels = (
    ('||',),
    ('&&',),
    ('==', '!='),
    ('<', '>', '<=', '>='),
    ('+', '-'),
    ('*', '/', '%'),
)

_binops = {
    '==': lambda a, b: int(a == b),
    '!=': lambda a, b: int(a != b),
    '<': lambda a, b: int(a < b),
    '>': lambda a, b: int(a > b),
    '<=': lambda a, b: int(a <= b),
    '>=': lambda a, b: int(a >= b),
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': _div,
    '%': _mod,
}


class PluralForms:
    """Compiled Plural-Forms expression.

    The expression is parsed once into a small tree of tuples:
      ('n',)                  the count
      ('num', value)          integer literal
      ('!', x), ('neg', x)    unary not, unary minus
      (op, left, right)       binary operator
      ('?', cond, a, b)       conditional
    and evaluated by walking the tree. Header contents come from
    catalog files, so nothing here is ever handed to eval().
    """
    #
    # Token regexp, one alternative per token class
    #
    _token_re = re.compile(r"""
        (?P<space>[ \t\r\n]+)                        |
        (?P<number>[0-9]+\b)                         |
        (?P<name>n\b)                                |
        (?P<paren>[()])                              |
        (?P<operator>&&|\|\||[<>!=]=|[-+*/%<>!?:])   |
        (?P<invalid>\w+|.)
        """, re.VERBOSE | re.DOTALL)

    def __init__(self, expression):
        if len(expression) > conf.MAX_PLURAL_EXPRESSION:
            raise PluralFormsError('Plural form expression is too long')
        self.expression = expression
        self._tokens = self.tokenize(expression)
        self._pos = 0
        self.tree = self._ternary(0)
        if self._peek() != '':
            raise PluralFormsError('Unexpected token in plural form',
                                   self._peek())
        del self._tokens

    def tokenize(self, expression):
        tokens = []
        for m in self._token_re.finditer(expression):
            kind = m.lastgroup
            if kind == 'space':
                continue
            if kind == 'invalid':
                raise PluralFormsError('Invalid token in plural form',
                                       m.group(kind))
            tokens.append(m.group(kind))
        tokens.append('')
        return tokens

    def _peek(self):
        return self._tokens[self._pos]

    def _next(self):
        tok = self._tokens[self._pos]
        if tok != '':
            self._pos += 1
        return tok

    def _expect(self, tok):
        got = self._next()
        if got != tok:
            if got == '':
                raise PluralFormsError('Unexpected end of plural form')
            raise PluralFormsError('Unexpected token in plural form', got)

    def _ternary(self, depth):
        if depth > conf.MAX_PLURAL_DEPTH:
            raise PluralFormsError('Plural form expression is too complex')
        cond = self._binary(0, depth)
        if self._peek() != '?':
            return cond
        self._next()
        iftrue = self._ternary(depth + 1)
        self._expect(':')
        iffalse = self._ternary(depth + 1)
        return ('?', cond, iftrue, iffalse)

    def _binary(self, level, depth):
        if level == len(_levels):
            return self._unary(depth)
        left = self._binary(level + 1, depth)
        while self._peek() in _levels[level]:
            op = self._next()
            right = self._binary(level + 1, depth)
            left = (op, left, right)
        return left

    def _unary(self, depth):
        if depth > conf.MAX_PLURAL_DEPTH:
            raise PluralFormsError('Plural form expression is too complex')
        tok = self._next()
        if tok == '!':
            return ('!', self._unary(depth + 1))
        if tok == '-':
            return ('neg', self._unary(depth + 1))
        if tok == '(':
            sub = self._ternary(depth + 1)
            self._expect(')')
            return sub
        if tok == 'n':
            return ('n',)
        if tok.isdigit():
            return ('num', int(tok, 10))
        if tok == '':
            raise PluralFormsError('Unexpected end of plural form')
        raise PluralFormsError('Unexpected token in plural form', tok)

    def _eval(self, node, n):
        op = node[0]
        if op == 'n':
            return n
        if op == 'num':
            return node[1]
        if op == '!':
            return int(not self._eval(node[1], n))
        if op == 'neg':
            return -self._eval(node[1], n)
        if op == '?':
            if self._eval(node[1], n):
                return self._eval(node[2], n)
            return self._eval(node[3], n)
        if op == '&&':
            return int(bool(self._eval(node[1], n))
                       and bool(self._eval(node[2], n)))
        if op == '||':
            return int(bool(self._eval(node[1], n))
                       or bool(self._eval(node[2], n)))
        return _binops[op](self._eval(node[1], n), self._eval(node[2], n))

    def get(self, n):
        """Return the plural form index for count n."""
        return self._eval(self.tree, int(n))

    __call__ = get

    def __repr__(self):
        return 'PluralForms(%r)' % self.expression


_plural_re = re.compile(r'\bplural\s*=\s*([^;]*)')
_nplurals_re = re.compile(r'\bnplurals\s*=\s*([0-9]+)')

def plural_expression(header):
    """Extract the expression from a Plural-Forms header value.

    'nplurals=2; plural=(n != 1);' gives '(n != 1)'; a value without
    'plural=' is taken as a bare expression.
    """
    m = _plural_re.search(header)
    if m:
        return m.group(1).strip()
    return header.strip().rstrip(';').strip()

def nplurals(header):
    m = _nplurals_re.search(header)
    if not m:
        return None
    return int(m.group(1))

def make_plural_form_function(header):
    """Compile a Plural-Forms header, falling back to the default rule."""
    try:
        return PluralForms(plural_expression(header))
    except PluralFormsError as e:
        logger.warning("Bad Plural-Forms %r (%s), using %r",
                       header, ' '.join(str(a) for a in e.args),
                       conf.DEFAULT_PLURAL_FORMS)
        return PluralForms(conf.DEFAULT_PLURAL_FORMS)
