"""Loq expression tree - immutable node types for parsed and evaluated expressions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Tuple

from loq.loq_token import LoqOperator


class LoqExpr(ABC):
    """
    Abstract base class for all Loq expression nodes.

    All nodes are immutable; evaluation builds new trees rather than changing
    existing ones.  Each compound node exclusively owns its children.
    """

    @abstractmethod
    def kind_name(self) -> str:
        """Short name of the result kind: "Num", "Bool" or "Sym"."""

    @abstractmethod
    def variable_names(self) -> List[str]:
        """Collect the names of all variables referenced in this expression, in order of appearance."""

    @abstractmethod
    def called_function_names(self) -> List[str]:
        """Collect the names of all functions called in this expression, in order of appearance."""

    def is_numeric(self) -> bool:
        """Check if this expression is exactly a number."""
        return isinstance(self, LoqNumeric)

    def is_bool(self) -> bool:
        """Check if this expression is exactly a boolean."""
        return isinstance(self, LoqBool)

    def is_variable(self) -> bool:
        """Check if this expression is exactly a variable reference."""
        return isinstance(self, LoqVariable)

    def is_value(self) -> bool:
        """Check if this expression is fully resolved to a number or boolean."""
        return isinstance(self, (LoqNumeric, LoqBool))

    def is_assignment(self) -> bool:
        """Check if this expression is an `=` binary operation."""
        return isinstance(self, LoqBinOp) and self.operator is LoqOperator.EQUALS

    def expect_value(self, msg: str = "expected a numeric expression") -> float:
        """
        Force this expression to a float.

        Only called where the caller has already established that the node is
        numeric, so failure is an internal fault rather than a user error.
        """
        assert isinstance(self, LoqNumeric), f"{msg}: {self!r}"
        return self.value

    def expect_name(self, msg: str = "expected a variable") -> str:
        """Force this expression to a variable name; failure is an internal fault."""
        assert isinstance(self, LoqVariable), f"{msg}: {self!r}"
        return self.name


def format_number(value: float) -> str:
    """
    Format a number for display: whole numbers print without a fractional part.

    Args:
        value: Number to format

    Returns:
        Display string, e.g. "3", "2.5", "-0.125", "inf"
    """
    if value.is_integer():
        return str(int(value))

    return str(value)


@dataclass(frozen=True)
class LoqNumeric(LoqExpr):
    """A real number."""
    value: float

    def kind_name(self) -> str:
        return "Num"

    def variable_names(self) -> List[str]:
        return []

    def called_function_names(self) -> List[str]:
        return []

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class LoqBool(LoqExpr):
    """A boolean, produced by `==`."""
    value: bool

    def kind_name(self) -> str:
        return "Bool"

    def variable_names(self) -> List[str]:
        return []

    def called_function_names(self) -> List[str]:
        return []

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class LoqVariable(LoqExpr):
    """A reference to a named value."""
    name: str

    def kind_name(self) -> str:
        return "Sym"

    def variable_names(self) -> List[str]:
        return [self.name]

    def called_function_names(self) -> List[str]:
        return []

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LoqFun(LoqExpr):
    """
    A functor: `name(p1,p2,...)`.

    On the left of a top-level `=` this is a definition head and every param
    is a LoqVariable.  Anywhere else it is a call and params are the arguments.
    """
    name: str
    params: Tuple[LoqExpr, ...] = ()

    def kind_name(self) -> str:
        return "Sym"

    def arity(self) -> int:
        """Number of parameters or arguments."""
        return len(self.params)

    def parameter_names(self) -> List[str]:
        """Names of the formal parameters of a definition head."""
        return [param.expect_name("function parameter is not a variable") for param in self.params]

    def variable_names(self) -> List[str]:
        names: List[str] = []
        for param in self.params:
            names.extend(param.variable_names())

        return names

    def called_function_names(self) -> List[str]:
        names = [self.name]
        for param in self.params:
            names.extend(param.called_function_names())

        return names

    def __str__(self) -> str:
        return f"{self.name}({','.join(str(param) for param in self.params)})"


@dataclass(frozen=True)
class LoqBinOp(LoqExpr):
    """
    A binary operation, including `=` assignments and definitions.

    Chains of equal-precedence operators parse left-deep, so a long sum is a
    long left spine.  Methods that visit the whole tree walk that spine in a
    loop and only recurse into right operands.
    """
    operator: LoqOperator
    left: LoqExpr
    right: LoqExpr

    def left_spine(self) -> Tuple[LoqExpr, List['LoqBinOp']]:
        """
        Split this operation into its leftmost operand and the chain of operations above it.

        Returns:
            The leftmost non-BinOp operand, and the BinOps on the left spine
            ordered innermost first
        """
        chain: List[LoqBinOp] = []
        node: LoqExpr = self
        while isinstance(node, LoqBinOp):
            chain.append(node)
            node = node.left

        chain.reverse()
        return node, chain

    def kind_name(self) -> str:
        return "Sym"

    def variable_names(self) -> List[str]:
        leftmost, chain = self.left_spine()
        names = leftmost.variable_names()
        for binop in chain:
            names.extend(binop.right.variable_names())

        return names

    def called_function_names(self) -> List[str]:
        leftmost, chain = self.left_spine()
        names = leftmost.called_function_names()
        for binop in chain:
            names.extend(binop.right.called_function_names())

        return names

    def __str__(self) -> str:
        leftmost, chain = self.left_spine()
        parts = [str(leftmost)]
        for binop in chain:
            parts.append(str(binop.operator))
            parts.append(str(binop.right))

        return "".join(parts)

    def __repr__(self) -> str:
        leftmost, chain = self.left_spine()
        text = repr(leftmost)
        for binop in chain:
            text = f"LoqBinOp(operator={binop.operator!r}, left={text}, right={binop.right!r})"

        return text


@dataclass(frozen=True)
class LoqGroup(LoqExpr):
    """A parenthesized subexpression, kept so printing preserves precedence."""
    inner: LoqExpr

    def kind_name(self) -> str:
        return "Sym"

    def variable_names(self) -> List[str]:
        return self.inner.variable_names()

    def called_function_names(self) -> List[str]:
        return self.inner.called_function_names()

    def __str__(self) -> str:
        return f"({self.inner})"
