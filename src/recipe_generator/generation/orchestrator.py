"""Retry orchestration for recipe generation.

Drives provider → extractor → validator under a fixed retry budget:

    IDLE → ATTEMPTING → SUCCEEDED           valid recipe, terminal
                      → FATAL               ConfigurationError or unexpected error, terminal
                      → RETRYING → ATTEMPTING   (same prompt, after a fixed delay)
                                 → EXHAUSTED    budget consumed, terminal

Retries only absorb non-deterministic model output and transient provider
failures (InvalidResponseFormat, SchemaValidationError, ProviderError share one
budget). Missing configuration is never retried.

All run state is local to one run() call. A RetryOrchestrator holds only its
collaborators, so one instance can serve concurrent runs. CancelledError is
never caught: a cancelled caller stops the run and no further attempt starts.
"""

import asyncio
import time
import uuid
from typing import Optional

from recipe_generator.generation.errors import GenerationError, GenerationFailed, RetriesExhausted
from recipe_generator.generation.extractor import extract_json
from recipe_generator.generation.validator import validate_recipe
from recipe_generator.models.constraints import ConstraintSet
from recipe_generator.models.generation import (
    AttemptOutcome,
    GenerationAttempt,
    GenerationConfig,
    GenerationResult,
    OrchestrationState,
)
from recipe_generator.models.recipe import GeneratedRecipe
from recipe_generator.prompts.prompts import build_recipe_prompt
from recipe_generator.providers.base import GenerationProvider
from recipe_generator.utils.config import config
from recipe_generator.utils.logger import logger


def _transition(current: OrchestrationState, target: OrchestrationState, log_extra: dict) -> OrchestrationState:
    logger.debug(f"State: {current.value} → {target.value}", extra=log_extra)
    return target


class RetryOrchestrator:
    """Run generation attempts until a valid recipe, a fatal error, or an empty budget."""

    def __init__(
        self,
        provider: GenerationProvider,
        *,
        generation_config: Optional[GenerationConfig] = None,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ) -> None:
        """Initialize orchestrator with its collaborators.

        Args:
            provider: Generation provider, shared across runs.
            generation_config: Sampling parameters. Defaults to GenerationConfig.from_settings().
            max_attempts: Provider calls allowed per run. Defaults to MAX_ATTEMPTS (2).
            retry_delay: Seconds to wait between attempts. Defaults to RETRY_DELAY_SECONDS (1).

        Raises:
            ValueError: If max_attempts < 1 or retry_delay < 0.
        """
        self.provider = provider
        self.generation_config = generation_config or GenerationConfig.from_settings()
        self.max_attempts = config.MAX_ATTEMPTS if max_attempts is None else max_attempts
        self.retry_delay = config.RETRY_DELAY_SECONDS if retry_delay is None else retry_delay

        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got: {self.max_attempts}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must not be negative, got: {self.retry_delay}")

    async def run(self, constraints: ConstraintSet) -> GenerationResult:
        """Generate one recipe for a ConstraintSet.

        Args:
            constraints: Validated constraints. The prompt is built once and
                reused unchanged for every attempt.

        Returns:
            GenerationResult: SUCCEEDED with a schema-complete recipe, FATAL with
            the ConfigurationError/GenerationFailed, or EXHAUSTED with
            RetriesExhausted. Retryable errors never surface individually.
        """
        run_id = uuid.uuid4().hex[:8]
        started = time.perf_counter()
        prompt = build_recipe_prompt(constraints)
        attempts: list[GenerationAttempt] = []
        attempt_count = 0
        state = OrchestrationState.IDLE

        logger.info(
            f"Starting recipe generation (model={self.provider.model_name}, "
            f"max_attempts={self.max_attempts})",
            extra={"run_id": run_id},
        )

        state = _transition(state, OrchestrationState.ATTEMPTING, {"run_id": run_id})
        while True:
            log_extra = {"run_id": run_id, "attempt": attempt_count + 1}
            attempt = GenerationAttempt(index=attempt_count, prompt=prompt)
            attempts.append(attempt)

            recipe = await self._run_attempt(attempt, log_extra)

            if attempt.outcome is AttemptOutcome.SUCCESS:
                state = _transition(state, OrchestrationState.SUCCEEDED, log_extra)
                elapsed_ms = int((time.perf_counter() - started) * 1000)
                logger.info(
                    f"✓ Recipe generated: '{recipe.title}' "
                    f"({len(attempts)} attempt(s), {elapsed_ms}ms)",
                    extra=log_extra,
                )
                return GenerationResult(state=state, recipe=recipe, attempts=attempts)

            if attempt.outcome is AttemptOutcome.FATAL_FAILURE:
                state = _transition(state, OrchestrationState.FATAL, log_extra)
                logger.error(
                    f"✗ Recipe generation aborted [{attempt.failure_reason}]: {attempt.error}",
                    extra=log_extra,
                )
                return GenerationResult(state=state, error=attempt.error, attempts=attempts)

            state = _transition(state, OrchestrationState.RETRYING, log_extra)
            attempt_count += 1
            if attempt_count >= self.max_attempts:
                state = _transition(state, OrchestrationState.EXHAUSTED, log_extra)
                error = RetriesExhausted(attempt_count, attempt.error)
                logger.error(
                    f"✗ Recipe generation exhausted {attempt_count} attempt(s) [{error.code}]",
                    extra=log_extra,
                )
                return GenerationResult(state=state, error=error, attempts=attempts)

            logger.warning(
                f"Attempt failed [{attempt.failure_reason}], retrying in {self.retry_delay}s "
                f"(attempt {attempt_count + 1}/{self.max_attempts})",
                extra=log_extra,
            )
            await asyncio.sleep(self.retry_delay)
            state = _transition(state, OrchestrationState.ATTEMPTING, log_extra)

    async def _run_attempt(self, attempt: GenerationAttempt, log_extra: dict) -> Optional[GeneratedRecipe]:
        """Run one provider → extract → validate pass, recording the outcome on the attempt."""
        logger.debug("Calling generation provider...", extra=log_extra)
        try:
            attempt.raw_response = await self.provider.generate(attempt.prompt, self.generation_config)
            attempt.candidate = extract_json(attempt.raw_response)
            recipe = validate_recipe(attempt.candidate)
        except GenerationError as e:
            attempt.error = e
            attempt.failure_reason = e.code
            attempt.outcome = AttemptOutcome.RETRYABLE_FAILURE if e.retryable else AttemptOutcome.FATAL_FAILURE
            logger.debug(f"Attempt failed: {e}", extra=log_extra)
            return None
        except Exception as e:
            logger.error(f"Unexpected error during generation attempt: {e}", exc_info=True, extra=log_extra)
            error = GenerationFailed(f"Recipe generation failed: {e}")
            error.__cause__ = e
            attempt.error = error
            attempt.failure_reason = error.code
            attempt.outcome = AttemptOutcome.FATAL_FAILURE
            return None

        attempt.outcome = AttemptOutcome.SUCCESS
        return recipe


async def orchestrate_generation(
    constraints: ConstraintSet,
    provider: GenerationProvider,
    **kwargs,
) -> GenerationResult:
    """Run a single generation with a throwaway orchestrator.

    Args:
        constraints: Validated constraints.
        provider: Generation provider.
        **kwargs: generation_config, max_attempts, retry_delay (see RetryOrchestrator).

    Returns:
        GenerationResult: Terminal outcome of the run.
    """
    return await RetryOrchestrator(provider, **kwargs).run(constraints)
