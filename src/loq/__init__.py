"""Loq symbolic arithmetic language: lexer, parser and evaluator."""

# Main API
from loq.loq import Loq
from loq.loq_config import LoqConfig

# Exceptions (for error handling)
from loq.loq_error import (
    LoqError, LoqTokenError, LoqParseError,
    LoqUnexpectedCharError, LoqExpectedTokenError, LoqUnexpectedTokenError, LoqInvalidExprError,
    LoqUnusedParamsError, LoqRecursiveFuncDefError, LoqInvalidFuncParamError
)

# Expression types
from loq.loq_expr import LoqExpr, LoqNumeric, LoqBool, LoqVariable, LoqFun, LoqBinOp, LoqGroup

# Lower-level components (for advanced usage)
from loq.loq_token import LoqLocation, LoqOperator, LoqToken, LoqTokenType
from loq.loq_lexer import LoqLexer
from loq.loq_parser import LoqParser
from loq.loq_evaluator import LoqEvaluator
from loq.loq_environment import LoqEnvironment
from loq.loq_repl import LoqRepl


__all__ = [
    # Main API
    "Loq", "LoqConfig",

    # Exceptions
    "LoqError", "LoqTokenError", "LoqParseError",
    "LoqUnexpectedCharError", "LoqExpectedTokenError", "LoqUnexpectedTokenError", "LoqInvalidExprError",
    "LoqUnusedParamsError", "LoqRecursiveFuncDefError", "LoqInvalidFuncParamError",

    # Expression types
    "LoqExpr", "LoqNumeric", "LoqBool", "LoqVariable", "LoqFun", "LoqBinOp", "LoqGroup",

    # Lower-level components
    "LoqLocation", "LoqOperator", "LoqToken", "LoqTokenType",
    "LoqLexer", "LoqParser", "LoqEvaluator", "LoqEnvironment", "LoqRepl"
]
