from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Any

from frontend.span import SourceSpan


class SymbolKind(Enum):
    FUNCTION = auto()
    PARAM = auto()
    LOCAL = auto()
    PRELUDE = auto()


@dataclass
class SymbolInfo:
    """Информация о символе в таблице"""
    name: str
    kind: SymbolKind
    type_name: Optional[str] = None
    span: Optional[SourceSpan] = None
    value: Any = None
    env_level: int = 0
    references: int = 0

    @property
    def is_function(self) -> bool:
        return self.kind in (SymbolKind.FUNCTION, SymbolKind.PRELUDE)


class Environment:
    """Окружение (цепочка областей видимости)"""

    # Имена из стандартной прелюдии, которые не надо объявлять
    PRELUDE = {
        'Some', 'None', 'Ok', 'Err',
        'Box', 'Vec', 'String', 'Option', 'Result',
        'drop', 'std', 'core', 'self', 'Self',
    }

    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.symbols: Dict[str, SymbolInfo] = {}
        # Все привязки по порядку, включая затенённые
        self.bindings: List[SymbolInfo] = []
        self.level = parent.level + 1 if parent else 0

    def define(self, name: str, kind: SymbolKind = SymbolKind.LOCAL,
               type_name: Optional[str] = None, span: Optional[SourceSpan] = None,
               value: Any = None) -> SymbolInfo:
        """Определить новый символ в текущем окружении"""
        info = SymbolInfo(
            name=name,
            kind=kind,
            type_name=type_name,
            span=span,
            value=value,
            env_level=self.level
        )
        self.symbols[name] = info
        self.bindings.append(info)
        return info

    def resolve(self, name: str) -> Optional[SymbolInfo]:
        """Найти символ в цепочке окружений"""
        if name in self.symbols:
            return self.symbols[name]
        if self.parent:
            return self.parent.resolve(name)
        return None

    def reference(self, name: str) -> Optional[SymbolInfo]:
        """resolve + отметка об использовании"""
        info = self.resolve(name)
        if info:
            info.references += 1
        return info

    def unused_bindings(self) -> List[SymbolInfo]:
        """Параметры и локальные привязки этого уровня, к которым не обращались."""
        return [
            info for info in self.bindings
            if info.kind in (SymbolKind.PARAM, SymbolKind.LOCAL)
            and info.references == 0
            and not info.name.startswith('_')
        ]

    @classmethod
    def with_prelude(cls) -> 'Environment':
        env = cls()
        for name in cls.PRELUDE:
            env.define(name, kind=SymbolKind.PRELUDE)
        return env

    def __repr__(self):
        return f"Env(level={self.level}, symbols={list(self.symbols.keys())})"
