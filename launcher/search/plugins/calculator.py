"""
Calculator category.

Arithmetic is evaluated with a restricted AST walker: numbers, the usual
operators, parentheses and a handful of math functions. Names, attribute
access and calls to anything else are rejected.

    2+2          → 4
    2^10         → 1024
    sqrt(2)*pi   → 4.442882938
"""

import ast
import math
import operator
import re
from typing import Callable, Dict, List, Tuple, Union

from ...models import SearchResultItem
from ...user_config import CalculatorOptions, UserConfig
from ..base import InputValidator, Searcher

CATEGORY = "calculator"

Number = Union[int, float]

_BINARY_OPS: Dict[type, Callable[[Number, Number], Number]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS: Dict[type, Callable[[Number], Number]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

_FUNCTIONS: Dict[str, Callable[..., Number]] = {
    "sqrt": math.sqrt,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "log": math.log10,
    "ln": math.log,
    "abs": abs,
    "round": round,
}

_CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

_ALLOWED_CHARS = re.compile(r"^[\d\s.+\-*/%^()a-z,]+$")
_HAS_OPERATOR_OR_CALL = re.compile(r"[+\-*/%^(]")
_MAX_EXPONENT = 1000
_MAX_RESULT_BITS = 4000


class CalculationError(ValueError):
    pass


def evaluate(expression: str) -> Number:
    """Evaluate an arithmetic expression, raising CalculationError on anything else."""
    source = expression.strip().lower().replace("^", "**")
    try:
        tree = ast.parse(source, mode="eval")
    except SyntaxError as e:
        raise CalculationError(f"Not an expression: {expression}") from e
    return _eval(tree.body)


def _check_size(op: ast.operator, left: Number, right: Number) -> None:
    """Reject operations whose integer result would exceed _MAX_RESULT_BITS before computing them."""
    if isinstance(op, ast.Pow):
        if abs(right) > _MAX_EXPONENT:
            raise CalculationError("Exponent too large")
        if isinstance(left, int) and isinstance(right, int) and right > 0 \
                and abs(left).bit_length() * right > _MAX_RESULT_BITS:
            raise CalculationError("Result too large")
    elif isinstance(op, ast.Mult):
        if isinstance(left, int) and isinstance(right, int) \
                and abs(left).bit_length() + abs(right).bit_length() > _MAX_RESULT_BITS:
            raise CalculationError("Result too large")


def _eval(node: ast.AST) -> Number:
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) \
            and not isinstance(node.value, bool):
        return node.value

    if isinstance(node, ast.Name) and node.id in _CONSTANTS:
        return _CONSTANTS[node.id]

    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval(node.operand))

    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        left = _eval(node.left)
        right = _eval(node.right)
        _check_size(node.op, left, right)
        try:
            result = _BINARY_OPS[type(node.op)](left, right)
        except (ZeroDivisionError, OverflowError, TypeError) as e:
            raise CalculationError(str(e)) from e
        if isinstance(result, complex):
            raise CalculationError("Result is not a real number")
        return result

    if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) \
            and node.func.id in _FUNCTIONS and not node.keywords:
        args = [_eval(arg) for arg in node.args]
        try:
            return _FUNCTIONS[node.func.id](*args)
        except (ValueError, TypeError, OverflowError) as e:
            raise CalculationError(str(e)) from e

    raise CalculationError(f"Unsupported expression element: {type(node).__name__}")


def format_result(value: Number, precision: int) -> str:
    if not isinstance(value, (int, float)):
        # e.g. (-8)**0.5 yields a complex number
        raise CalculationError("Result is not a real number")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CalculationError("Result is not finite")
        if value.is_integer():
            return str(int(value))
        return f"{value:.{precision}f}".rstrip("0").rstrip(".")
    if value.bit_length() > _MAX_RESULT_BITS:
        raise CalculationError("Result too large")
    return str(value)


_ALLOWED_NODES = (ast.Expression, ast.Constant, ast.Name, ast.Load, ast.UnaryOp, ast.BinOp, ast.Call,
                  ast.operator, ast.unaryop)


def _is_arithmetic(tree: ast.AST) -> bool:
    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            return False
        if isinstance(node, ast.Name) and node.id not in _FUNCTIONS and node.id not in _CONSTANTS:
            return False
    return True


class CalculatorInputValidator(InputValidator):

    def is_valid_for(self, query: str) -> bool:
        q = query.strip().lower()
        has_operand = any(ch.isdigit() for ch in q) or any(c in q for c in _CONSTANTS)
        if not q or not has_operand:
            return False
        if not _ALLOWED_CHARS.match(q) or not _HAS_OPERATOR_OR_CALL.search(q):
            return False
        try:
            tree = ast.parse(q.replace("^", "**"), mode="eval")
        except SyntaxError:
            return False
        return _is_arithmetic(tree)


class CalculatorSearcher(Searcher):

    def __init__(self, options: CalculatorOptions):
        self.precision = options.precision

    def search(self, query: str) -> List[SearchResultItem]:
        try:
            result = format_result(evaluate(query), self.precision)
        except CalculationError:
            return []

        return [
            SearchResultItem(
                name=result,
                description=f"= {query.strip()}  (copy to clipboard)",
                execution_argument=result,
                icon="calculator",
                origin_category=CATEGORY,
            )
        ]


def create(config: UserConfig) -> Tuple[InputValidator, Searcher]:
    return CalculatorInputValidator(), CalculatorSearcher(config.calculator)
