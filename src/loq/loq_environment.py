"""Environment management for Loq variable and function bindings."""

from dataclasses import dataclass, field
from typing import Dict, List

from loq.loq_expr import LoqBinOp, LoqExpr, LoqFun


@dataclass
class LoqEnvironment:
    """
    Variable and function bindings for a Loq session.

    A function is stored as its whole defining `name(params)=body` expression
    so the formal parameters stay available for arity checks and substitution.
    A name is bound in at most one of the two tables; the last definition wins.
    """
    variables: Dict[str, LoqExpr] = field(default_factory=dict)
    functions: Dict[str, LoqBinOp] = field(default_factory=dict)

    def define_variable(self, name: str, value: LoqExpr) -> None:
        """
        Bind a variable, replacing any variable or function of the same name.

        Args:
            name: Variable name
            value: Evaluated value
        """
        self.functions.pop(name, None)
        self.variables[name] = value

    def define_function(self, definition: LoqBinOp) -> None:
        """
        Store a function definition, replacing any variable or function of the same name.

        Args:
            definition: The whole `name(params)=body` expression
        """
        head = definition.left
        assert isinstance(head, LoqFun), f"function definition without a head: {definition!r}"
        self.variables.pop(head.name, None)
        self.functions[head.name] = definition

    def lookup_variable(self, name: str) -> LoqExpr | None:
        """Look up a variable's value, or None if it is unbound."""
        return self.variables.get(name)

    def lookup_function(self, name: str) -> LoqBinOp | None:
        """Look up a function's stored definition, or None if it is undefined."""
        return self.functions.get(name)

    def function_arity(self, name: str) -> int | None:
        """
        Get the number of formal parameters of a defined function.

        Args:
            name: Function name

        Returns:
            Parameter count, or None if the function is undefined
        """
        definition = self.functions.get(name)
        if definition is None:
            return None

        head = definition.left
        assert isinstance(head, LoqFun)
        return head.arity()

    def has_binding(self, name: str) -> bool:
        """Check if a name is bound as either a variable or a function."""
        return name in self.variables or name in self.functions

    def get_available_bindings(self) -> List[str]:
        """Get all bound names, sorted."""
        return sorted([*self.variables.keys(), *self.functions.keys()])

    def clear(self) -> None:
        """Remove all bindings."""
        self.variables.clear()
        self.functions.clear()

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"LoqEnvironment(variables={list(self.variables)}, functions={list(self.functions)})"
