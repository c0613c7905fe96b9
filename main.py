"""
Пример использования: калькулятор, приветствие и проверка файла
"""
import logging
import sys
from pathlib import Path

from calculator import Accumulator, greet
from scripts.check_core import check_file
from semantic.report import format_text


def run_examples() -> float:
    calc = Accumulator.new().add(10.0).subtract(3.0)
    print(f"Calculator result: {calc.get_value():g}")
    print(greet("fragcheck"))
    return calc.get_value()


if __name__ == '__main__':
    logging.basicConfig(level=logging.ERROR, format='[%(levelname)s] %(message)s', stream=sys.stderr)

    run_examples()

    if len(sys.argv) == 2:
        try:
            fragment, findings = check_file(Path(sys.argv[1]))
        except OSError as e:
            print(f"Ошибка чтения: {e}", file=sys.stderr)
            sys.exit(1)
        print()
        print(format_text(findings, fragment.name))
        if any(f.severity.name == 'ERROR' for f in findings):
            sys.exit(1)
