from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import replace

from docextract.core.exceptions import AllStrategiesExhaustedError, StrategyFailedError
from docextract.core.logging import get_logger
from docextract.services.extraction.base import (
    ExtractionOptions,
    ExtractionStrategy,
    TextExtractionResult,
)

logger = get_logger(__name__)


class StrategyChain:
    """Runs a format's strategies in priority order until one returns.

    Only a raised exception (or a missed deadline) moves the chain on to the
    next strategy. A strategy that returns low-confidence text still wins.
    """

    def __init__(self, format_name: str, strategies: list[ExtractionStrategy]):
        if not strategies:
            raise ValueError(f"No extraction strategies registered for {format_name}")
        self.format_name = format_name
        self.strategies = strategies

    def strategies_for(self, options: ExtractionOptions) -> list[ExtractionStrategy]:
        # max_retries caps the total number of strategies attempted per call
        if not options.fallback_strategies:
            return self.strategies[:1]
        return self.strategies[: max(1, options.max_retries)]

    def run(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        failures: list[str] = []
        last_error: Exception | None = None

        for strategy in self.strategies_for(options):
            logger.info(f"[{self.format_name}] Trying extraction strategy: {strategy.name}")
            try:
                result = _attempt_with_deadline(strategy, file_data, options)
            except Exception as e:
                message = str(e) or type(e).__name__
                logger.warning(f"[{self.format_name}] Strategy {strategy.name} failed: {message}")
                failures.append(f"{strategy.name} failed: {message}")
                last_error = e
                continue

            return replace(result, warnings=failures + list(result.warnings))

        raise AllStrategiesExhaustedError(self.format_name, failures, last_error) from last_error


def _attempt_with_deadline(
    strategy: ExtractionStrategy, file_data: bytes, options: ExtractionOptions
) -> TextExtractionResult:
    if not options.timeout:
        return strategy.attempt(file_data, options)

    # Parser calls can't be interrupted; on timeout the worker thread is
    # abandoned and its eventual result discarded.
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"strategy-{strategy.name}")
    future = executor.submit(strategy.attempt, file_data, options)
    try:
        return future.result(timeout=options.timeout)
    except FutureTimeoutError:
        if not future.done():
            future.cancel()
            raise StrategyFailedError(f"timed out after {options.timeout:g}s") from None
        raise
    finally:
        executor.shutdown(wait=False)
