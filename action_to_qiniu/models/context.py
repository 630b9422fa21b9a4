"""Run context passed explicitly to every pipeline stage."""

from typing import Optional

from pydantic import Field

from .base import RelayBaseModel
from .config import AppConfig
from ..utils.constants import DEFAULT_MAX_RETRIES, DEFAULT_MAX_WORKERS, MAX_WORKERS_LIMIT


class RunContext(RelayBaseModel):
    """
    Options shared by the stages of one run.

    Attributes:
        verbose: Per-file reporting and surfaced command output
        debug: Logging verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        max_workers: Concurrent uploads (1 = sequential)
        max_retries: Extra attempts per file for transient upload errors
        timeout: Post-process command timeout in seconds
    """

    verbose: bool = True
    debug: int = 0
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1, le=MAX_WORKERS_LIMIT)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    timeout: float = Field(default=30.0, gt=0)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        verbose: Optional[bool] = None,
        max_workers: Optional[int] = None,
        debug: int = 0,
    ) -> "RunContext":
        """
        Build the context from configuration, applying command-line overrides.

        Args:
            config: Validated configuration
            verbose: Override for ``options.verbose``
            max_workers: Override for ``options.maxWorkers``
            debug: Logging verbosity level

        Returns:
            RunContext for the run
        """
        options = config.options
        return cls(
            verbose=options.verbose if verbose is None else verbose,
            debug=debug,
            max_workers=options.max_workers if max_workers is None else max_workers,
            max_retries=options.max_retries,
            timeout=options.timeout_seconds,
        )


__all__ = ["RunContext"]
