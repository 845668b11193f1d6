"""Generation provider contract.

The orchestrator depends only on this protocol. A provider sends one prompt
with its sampling configuration to a remote model and returns the raw text.

Failure contract:
- ProviderUnavailable (a ConfigurationError): provider is unconfigured. Fatal.
- ProviderError: transport, quota or timeout failure. Retryable.
"""

from typing import Protocol

from recipe_generator.models.generation import GenerationConfig


class GenerationProvider(Protocol):
    model_name: str

    async def generate(self, prompt: str, generation_config: GenerationConfig) -> str:
        raise NotImplementedError
