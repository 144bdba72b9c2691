"""Expression pipeline: tokenize -> to_postfix -> evaluate.

Each stage is a pure function over its inputs; nothing is cached between
calls, so the pipeline can be used from several threads at once.
"""

from exprcalc.expression.tokens import (
    Identifier,
    Number,
    Operator,
    Paren,
    Token,
    format_number,
    token_text,
)
from exprcalc.expression.tables import (
    DEFAULT_CONSTANTS,
    DEFAULT_FUNCTIONS,
    ConstantTable,
    FunctionTable,
)
from exprcalc.expression.tokenizer import tokenize
from exprcalc.expression.converter import to_postfix
from exprcalc.expression.evaluator import evaluate
from exprcalc.expression.expression import (
    InfixExpression,
    PostfixExpression,
    evaluate_expression,
    validate_variables,
)

__all__ = [
    "Identifier",
    "Number",
    "Operator",
    "Paren",
    "Token",
    "format_number",
    "token_text",
    "DEFAULT_CONSTANTS",
    "DEFAULT_FUNCTIONS",
    "ConstantTable",
    "FunctionTable",
    "tokenize",
    "to_postfix",
    "evaluate",
    "InfixExpression",
    "PostfixExpression",
    "evaluate_expression",
    "validate_variables",
]
