"""Value objects describing one generation run.

GenerationConfig travels alongside the prompt to the provider. GenerationAttempt
and GenerationResult live only for the duration of one orchestration call and
are never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from recipe_generator.generation.errors import GenerationError
from recipe_generator.models.recipe import GeneratedRecipe
from recipe_generator.utils.config import config


class GenerationConfig(BaseModel):
    """Sampling parameters for the provider call (never part of the prompt text)."""

    model_config = ConfigDict(frozen=True)

    temperature: Annotated[float, Field(ge=0.0, le=1.0, description="Creativity/randomness factor")]
    top_p: Annotated[float, Field(ge=0.0, le=1.0, description="Nucleus sampling threshold")]
    top_k: Annotated[int, Field(gt=0, description="Candidate pool width")]
    max_output_tokens: Annotated[int, Field(gt=0, description="Maximum output length in tokens")]

    @classmethod
    def from_settings(cls) -> "GenerationConfig":
        """Build from the TEMPERATURE/TOP_P/TOP_K/MAX_OUTPUT_TOKENS settings."""
        return cls(
            temperature=config.TEMPERATURE,
            top_p=config.TOP_P,
            top_k=config.TOP_K,
            max_output_tokens=config.MAX_OUTPUT_TOKENS,
        )


class OrchestrationState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    FATAL = "fatal"


class AttemptOutcome(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    FATAL_FAILURE = "fatal_failure"


@dataclass
class GenerationAttempt:
    """One provider call and what came of it."""

    index: int
    prompt: str
    raw_response: Optional[str] = None
    candidate: Optional[Any] = None
    outcome: AttemptOutcome = AttemptOutcome.PENDING
    failure_reason: Optional[str] = None
    error: Optional[GenerationError] = None


@dataclass
class GenerationResult:
    """Terminal outcome of an orchestration run.

    Exactly one of ``recipe`` and ``error`` is set. ``state`` is SUCCEEDED,
    EXHAUSTED or FATAL.
    """

    state: OrchestrationState
    recipe: Optional[GeneratedRecipe] = None
    error: Optional[GenerationError] = None
    attempts: list[GenerationAttempt] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.recipe is not None

    def unwrap(self) -> GeneratedRecipe:
        """Return the recipe or raise the terminal error."""
        if self.recipe is None:
            raise self.error
        return self.recipe
