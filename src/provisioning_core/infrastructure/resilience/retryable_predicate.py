"""Bounded retry of a boolean predicate with a growing poll period."""
import logging
import time
from typing import Callable, Generic, Optional, TypeVar

from provisioning_core.domain.base.ports import LoggingPort
from provisioning_core.domain.core.exceptions import OperationTimeoutError, TransientProviderError

T = TypeVar("T")

DEFAULT_PERIOD = 0.05
DEFAULT_MAX_PERIOD = 1.0
BACKOFF_FACTOR = 1.5


class RetryablePredicate(Generic[T]):
    """
    Predicate that re-evaluates a wrapped predicate until it holds or time runs out.

    The wrapped predicate is always evaluated at least once, and once more
    when the deadline is reached, so a timeout of zero or less means a
    single evaluation. A TransientProviderError from the wrapped predicate
    counts as "not yet"; any other exception propagates.
    """

    def __init__(self,
                 predicate: Callable[[T], bool],
                 timeout: float,
                 period: Optional[float] = None,
                 max_period: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep,
                 logger: Optional[LoggingPort] = None):
        """
        Initialize the predicate.

        Args:
            predicate: Predicate over freshly fetched state
            timeout: Seconds to keep retrying
            period: First interval between evaluations in seconds, 0.05 when omitted
            max_period: Upper bound of the interval; ten times an explicit ``period``,
                otherwise 1 second
            clock: Monotonic time source
            sleep: Blocking sleep function
            logger: Optional logger, defaults to the module logger
        """
        self._predicate = predicate
        self._timeout = timeout
        if period is None:
            period = DEFAULT_PERIOD
            if max_period is None:
                max_period = DEFAULT_MAX_PERIOD
        self._period = period
        self._max_period = max_period if max_period is not None else period * 10
        self._clock = clock
        self._sleep = sleep
        self._logger = logger or logging.getLogger(__name__)

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def period(self) -> float:
        return self._period

    @property
    def max_period(self) -> float:
        return self._max_period

    def next_max_interval(self, attempt: int, end: float) -> float:
        """
        Interval before the next evaluation.

        Grows by a factor of 1.5 per attempt, capped at the maximum period and
        at the time left until ``end``.

        Args:
            attempt: Number of the attempt just made, starting at 1
            end: Deadline on the clock's scale

        Returns:
            Seconds to sleep; zero or negative once the deadline has passed
        """
        interval = min(self._period * BACKOFF_FACTOR ** (attempt - 1), self._max_period)
        return min(interval, end - self._clock())

    def _evaluate(self, value: T) -> bool:
        try:
            return bool(self._predicate(value))
        except TransientProviderError as e:
            self._logger.debug("Predicate %s on %s not evaluated: %s", self._predicate, value, e)
            return False

    def __call__(self, value: T) -> bool:
        attempt = 1
        now = self._clock()
        end = now + self._timeout
        while now < end:
            if self._evaluate(value):
                return True
            sleep_time = self.next_max_interval(attempt, end)
            attempt += 1
            if sleep_time > 0:
                self._sleep(sleep_time)
            now = self._clock()
        if self._evaluate(value):
            return True
        self._logger.warning("Predicate %s on %s did not hold within %ss",
                             self._predicate, value, self._timeout)
        return False

    def wait_for(self, value: T) -> None:
        """
        Block until the predicate holds for ``value``.

        Raises:
            OperationTimeoutError: If it did not hold before the timeout elapsed
        """
        if not self(value):
            raise OperationTimeoutError(
                f"Timed out after {self._timeout}s waiting for {self._predicate} on {value}",
                timeout=self._timeout,
            )

    def __str__(self) -> str:
        return f"retry({self._predicate}, timeout={self._timeout})"


def retry(predicate: Callable[[T], bool],
          timeout: float,
          period: Optional[float] = None,
          max_period: Optional[float] = None,
          **kwargs) -> RetryablePredicate[T]:
    """
    Wrap ``predicate`` so that it is retried until it holds or ``timeout`` elapses.

    Args:
        predicate: Predicate over freshly fetched state
        timeout: Seconds to keep retrying
        period: First interval between evaluations in seconds, 0.05 when omitted
        max_period: Upper bound of the interval; ten times an explicit ``period``,
            otherwise 1 second
        **kwargs: ``clock``, ``sleep`` and ``logger`` overrides

    Returns:
        The retrying predicate
    """
    return RetryablePredicate(predicate, timeout, period, max_period, **kwargs)
