"""Syntax tree nodes.

Every node kind is a small generated class hung off its base (``Expr.Binary``,
``Stmt.While``, ...). Nodes keep identity equality and hashing, since the
interpreter keys its table of resolved locals by node, and they expose their
fields positionally to ``match`` statements.
"""


def make_syntax_tree_node(base_class, name, *fields):
    def __init__(self, *values):
        if len(values) != len(fields):
            raise TypeError(
                f"{name}() takes {len(fields)} positional arguments "
                f"but {len(values)} were given")
        for field, value in zip(fields, values):
            setattr(self, field, value)

    def __repr__(self):
        values = ", ".join(f"{field}={getattr(self, field)!r}"
                           for field in fields)
        return f"{base_class.__name__}.{name}({values})"

    subclass = type(name, (base_class,), {
        "__slots__": fields,
        "__match_args__": fields,
        "__init__": __init__,
        "__repr__": __repr__,
    })
    subclass.__qualname__ = f"{base_class.__name__}.{name}"
    setattr(base_class, name, subclass)
    return subclass


class Expr:
    __slots__ = ()


class Stmt:
    __slots__ = ()


make_syntax_tree_node(Expr, "Assign", "name", "value")
make_syntax_tree_node(Expr, "Binary", "left", "operator", "right")
make_syntax_tree_node(Expr, "Call", "callee", "paren", "arguments")
make_syntax_tree_node(Expr, "Get", "object", "name")
make_syntax_tree_node(Expr, "Grouping", "expression")
make_syntax_tree_node(Expr, "Literal", "value")
make_syntax_tree_node(Expr, "Logical", "left", "operator", "right")
make_syntax_tree_node(Expr, "Set", "object", "name", "value")
make_syntax_tree_node(Expr, "Super", "keyword", "method")
make_syntax_tree_node(Expr, "This", "keyword")
make_syntax_tree_node(Expr, "Unary", "operator", "right")
make_syntax_tree_node(Expr, "Variable", "name")

make_syntax_tree_node(Stmt, "Block", "statements")
make_syntax_tree_node(Stmt, "Class", "name", "superclass", "methods")
make_syntax_tree_node(Stmt, "Expression", "expression")
make_syntax_tree_node(Stmt, "Function", "name", "params", "body")
make_syntax_tree_node(Stmt, "If", "condition", "then_branch", "else_branch")
make_syntax_tree_node(Stmt, "Print", "expression")
make_syntax_tree_node(Stmt, "Return", "keyword", "value")
make_syntax_tree_node(Stmt, "Var", "name", "initializer")
make_syntax_tree_node(Stmt, "While", "condition", "body")
