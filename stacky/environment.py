from typing import Dict, Optional
from stacky.errors import RuntimeFault
from stacky.types import Binding, VariableBinding


class Environment:
    """Represents a scope mapping names to words and variables."""
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Binding] = {}

    def get(self, name: str) -> Binding:
        if name in self.values:
            return self.values[name]
        if self.parent:
            return self.parent.get(name)
        raise RuntimeFault(f'Word not found: {name}')

    def set(self, name: str, binding: Binding):
        # Writes never reach into a parent scope; an inner binding shadows it
        self.values[name] = binding

    def get_variable(self, name: str) -> VariableBinding:
        binding = self.get(name)
        if not isinstance(binding, VariableBinding):
            raise RuntimeFault(f'{name} is a word, not a variable')
        return binding
