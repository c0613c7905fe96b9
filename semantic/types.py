"""
Минимальная модель типов для проверки привязок.
None означает "тип неизвестен": с неизвестным типом ничего не конфликтует.
"""
from typing import Optional

INTEGER_TYPES = {
    'i8', 'i16', 'i32', 'i64', 'i128', 'isize',
    'u8', 'u16', 'u32', 'u64', 'u128', 'usize',
}

FLOAT_TYPES = {'f32', 'f64'}

# Типы литералов без суффикса, как их пишет rustc
INTEGER_LITERAL = '{integer}'
FLOAT_LITERAL = '{float}'

BOOL = 'bool'
CHAR = 'char'
STR_REF = '&str'
STRING = 'String'
UNIT = '()'
# Тип расходящихся выражений (panic!, return)
NEVER = '!'

COMPARISON_OPS = {'==', '!=', '<', '>', '<=', '>='}
LOGICAL_OPS = {'&&', '||'}


def is_known(type_name: Optional[str]) -> bool:
    """Типы, про которые модель может что-то утверждать."""
    if type_name is None:
        return False
    return (
        type_name in INTEGER_TYPES
        or type_name in FLOAT_TYPES
        or type_name in (INTEGER_LITERAL, FLOAT_LITERAL, BOOL, CHAR, STR_REF, STRING, UNIT, NEVER)
    )


def is_numeric(type_name: Optional[str]) -> bool:
    return type_name in INTEGER_TYPES or type_name in FLOAT_TYPES \
        or type_name in (INTEGER_LITERAL, FLOAT_LITERAL)


def is_compatible(expected: Optional[str], actual: Optional[str]) -> bool:
    if expected is None or actual is None:
        return True
    if actual == NEVER or expected == actual:
        return True
    if not is_known(expected) or not is_known(actual):
        return True
    if actual == INTEGER_LITERAL:
        return expected in INTEGER_TYPES
    if actual == FLOAT_LITERAL:
        return expected in FLOAT_TYPES
    if expected == INTEGER_LITERAL:
        return actual in INTEGER_TYPES
    if expected == FLOAT_LITERAL:
        return actual in FLOAT_TYPES
    return False


def unify(left: Optional[str], right: Optional[str]) -> Optional[str]:
    """Тип результата арифметики над двумя операндами."""
    if left is None or right is None:
        return None
    if left == right:
        return left
    if left == NEVER:
        return right
    if right == NEVER:
        return left
    # Литерал подстраивается под конкретный тип
    if left in (INTEGER_LITERAL, FLOAT_LITERAL) and is_compatible(right, left):
        return right
    if right in (INTEGER_LITERAL, FLOAT_LITERAL) and is_compatible(left, right):
        return left
    return None
