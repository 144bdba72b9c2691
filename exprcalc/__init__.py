"""exprcalc - arithmetic expression evaluation.

    >>> from exprcalc import evaluate_expression
    >>> evaluate_expression("2+3*4")
    14.0
"""

from exprcalc.expression import (
    ConstantTable,
    FunctionTable,
    InfixExpression,
    PostfixExpression,
    evaluate,
    evaluate_expression,
    to_postfix,
    tokenize,
)

__version__ = "0.1.0"

__all__ = [
    "ConstantTable",
    "FunctionTable",
    "InfixExpression",
    "PostfixExpression",
    "evaluate",
    "evaluate_expression",
    "to_postfix",
    "tokenize",
]
