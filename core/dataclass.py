from abc import ABC, abstractmethod

"""
This file defines the core data structure used to represent a DSL program.

The base class `DSLProgram` is an abstract representation of a front-end
result that a compiler consumes. Each concrete DSL defines its own subclass
(typically a frozen dataclass) holding its domain-specific content.

All DSL programs must implement a `validate` method to ensure internal
consistency; it raises on the first violation.
"""
class DSLProgram(ABC):
    @abstractmethod
    def validate(self) -> None:
        """Validate the integrity of the program"""
        pass
