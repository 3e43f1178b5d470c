import abc

from genmapper.generator.model import GeneratorContext, GeneratorResult


class CodeGenerator(metaclass=abc.ABCMeta):
    """Interface for code generators used by `genmapper`."""

    @abc.abstractmethod
    def generate(self, context: GeneratorContext) -> GeneratorResult:
        raise NotImplementedError
