import ast
import math
import operator


# Based off https://stackoverflow.com/a/30134081
_operations = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Pow: operator.pow,
}

_unary_operations = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def _safe_eval(node, variables, functions):
    if isinstance(node, ast.Constant):
        assert isinstance(node.value, (int, float)) \
            and not isinstance(node.value, bool), 'Unsafe constant'
        return node.value
    elif isinstance(node, ast.Name):
        return variables[node.id]  # KeyError -> Unsafe variable
    elif isinstance(node, ast.UnaryOp):
        op = _unary_operations[node.op.__class__]  # KeyError -> Unsafe operation
        return op(_safe_eval(node.operand, variables, functions))
    elif isinstance(node, ast.BinOp):
        op = _operations[node.op.__class__]  # KeyError -> Unsafe operation
        left = _safe_eval(node.left, variables, functions)
        right = _safe_eval(node.right, variables, functions)
        if isinstance(node.op, ast.Pow):
            assert right < 100
        return op(left, right)
    elif isinstance(node, ast.Call):
        assert not node.keywords, 'Unsafe function call'
        assert isinstance(node.func, ast.Name), 'Unsafe function derivation'
        func = functions[node.func.id]  # KeyError -> Unsafe function
        args = [_safe_eval(arg, variables, functions) for arg in node.args]
        return func(*args)

    assert False, 'Unsafe operation'


# https://stackoverflow.com/a/20748308
# ast.literal_eval allows addition but bans multiplication.
# literal_eval(repr(1+2j)) == 1+2j

MATH_VARIABLES = {'pi': math.pi}
MATH_FUNCTIONS = {'sqrt': math.sqrt}


def safe_eval(expr, variables=MATH_VARIABLES, functions=MATH_FUNCTIONS):
    """ Evaluates an arithmetic expression. Numbers pass through unchanged.

    Raises ValueError if expr cannot be evaluated safely.
    """
    if not isinstance(expr, str):
        return expr
    try:
        node = ast.parse(expr, '<string>', 'eval').body
        return _safe_eval(node, variables, functions)
    except (SyntaxError, KeyError, AssertionError, ArithmeticError, TypeError, ValueError) as e:
        raise ValueError(f'invalid expression {expr!r}: {e!r}')
