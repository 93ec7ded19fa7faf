## Base LLM Client Interface
from abc import ABC, abstractmethod


class PlannerError(Exception):
    """The text generation service could not produce a response."""


class LLMClient(ABC):
    @abstractmethod
    def generate_text(self, * , system: str, user: str, temperature: float = 0.2) -> str:
        """
        Return the model's reply to a single system + user exchange.
        Concrete clients raise PlannerError when the service fails.
        """
        raise NotImplementedError
