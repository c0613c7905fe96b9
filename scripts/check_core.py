from pathlib import Path
from typing import List, Tuple

from semantic.classifier import Classifier, Fragment
from semantic.diagnostics import DiagnosticFinding


def check_file(file_path: Path) -> Tuple[Fragment, List[DiagnosticFinding]]:
    """Общий пайплайн: чтение файла и классификация"""
    if not file_path.exists():
        raise FileNotFoundError(f"File '{file_path}' not found.")

    fragment = Fragment.from_file(file_path)
    return fragment, Classifier().classify(fragment)
