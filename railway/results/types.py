"""Result Container

Implements the two-track Result type: ``Success`` carries a value,
``Failure`` carries an ``Error``. Sequential combinators (map, bind, tap,
ensure) are short-circuiting: once a pipeline is on the failure track,
later steps are skipped and the original error is returned unchanged.
Recovery only happens through an explicit ``compensate``.

Exceptions raised by user callbacks are never caught here, except by
``try_result``/``try_result_async``, which exist to lift throwing code
onto the railway.

Usage:
    from railway import Failure, Success, NotFoundError, failure, success

    def find_user(user_id: str) -> Result[User]:
        user = repo.get(user_id)
        if user is None:
            return failure(NotFoundError(f"User {user_id} not found"))
        return success(user)

    match find_user("123").map(lambda u: u.name):
        case Success(name):
            print(name)
        case Failure(error):
            log.warning("lookup_failed", code=error.code)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING, Any, Callable, Generic, NoReturn,
    TypeVar, Union, final,
)

from railway.core.logging import get_logger
from railway.errors.exceptions import ErrorException, ResultAccessError
from railway.errors.types import (
    AggregateError,
    BadRequestError,
    ConflictError,
    DomainError,
    Error,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
    UnauthorizedError,
    UnexpectedError,
    ValidationError,
)

from ._invoke import invoke
from .unit import UNIT, Unit

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")
U = TypeVar("U")

ErrorOrFactory = Union[Error, Callable[..., Error]]

log = get_logger("railway.results")


def _error_from(error: ErrorOrFactory, value: Any) -> Error:
    if isinstance(error, Error):
        return error
    return invoke(error, value)


@final
@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Success track. Immutable; equal when the values are equal."""
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def error(self) -> NoReturn:
        raise ResultAccessError(f"Cannot read the error of a successful result: {self.value!r}")

    # --- unwrapping ------------------------------------------------------

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> NoReturn:
        raise ResultAccessError(f"Called unwrap_error on Success: {self.value!r}")

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[Error], T]) -> T:
        return self.value

    def unwrap_or_raise(self) -> T:
        return self.value

    def expect(self, msg: str) -> T:
        return self.value

    # --- sequential combinators -----------------------------------------

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the success value.

        A value built by ``combine`` is spread over an ``f`` that takes one
        parameter per item; a nullary ``f`` is called with nothing.
        """
        return Success(invoke(f, self.value))

    def bind(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain an operation that may fail; its result is returned as-is."""
        return invoke(f, self.value)

    and_then = bind

    def tap(self, f: Callable[..., Any]) -> Result[T]:
        """Run ``f`` for its side effect; returns this result unchanged."""
        invoke(f, self.value)
        return self

    def tap_on_failure(self, f: Callable[..., Any]) -> Result[T]:
        return self

    def ensure(self, predicate: Callable[[T], bool], error: ErrorOrFactory) -> Result[T]:
        """Fail with ``error`` unless ``predicate(value)`` holds.

        ``error`` may be a factory; it receives the value when it takes an
        argument and is only called when the predicate fails.
        """
        if invoke(predicate, self.value):
            return self
        return Failure(_error_from(error, self.value))

    def map_error(self, f: Callable[[Error], Error]) -> Result[T]:
        return self

    map_on_failure = map_error

    def when(self, condition: bool | Callable[[T], bool], f: Callable[[T], Result[T]]) -> Result[T]:
        """Bind ``f`` only when ``condition`` (a bool or a predicate) holds."""
        holds = invoke(condition, self.value) if callable(condition) else condition
        return invoke(f, self.value) if holds else self

    def unless(self, condition: bool | Callable[[T], bool], f: Callable[[T], Result[T]]) -> Result[T]:
        holds = invoke(condition, self.value) if callable(condition) else condition
        return self if holds else invoke(f, self.value)

    # --- recovery ---------------------------------------------------------

    def compensate(
        self,
        predicate_or_f: Callable[..., Any],
        f: Callable[..., Result[T]] | None = None,
    ) -> Result[T]:
        return self

    recover_on_failure = compensate

    # --- accumulation -----------------------------------------------------

    def combine(self, other: Result[U]) -> Result[Any]:
        """Pair this result with an independent one (see ``railway.combine``)."""
        from .combine import combine_pair
        return combine_pair(self, other)

    # --- terminal folds ---------------------------------------------------

    def match(self, on_success: Callable[[T], U], on_failure: Callable[[Error], U]) -> U:
        return invoke(on_success, self.value)

    def switch(self, on_success: Callable[[T], Any], on_failure: Callable[[Error], Any]) -> None:
        invoke(on_success, self.value)

    def match_error(self, on_success: Callable[[T], U], **handlers: Callable[[Any], U]) -> U:
        return invoke(on_success, self.value)

    async def map_async(self, f: Callable[[T], Awaitable[U]]) -> Result[U]:
        """Async variant of map."""
        return Success(await invoke(f, self.value))

    async def bind_async(self, f: Callable[[T], Awaitable[Result[U]]]) -> Result[U]:
        """Async variant of bind."""
        return await invoke(f, self.value)


@final
@dataclass(frozen=True, slots=True)
class Failure:
    """Failure track. Wraps an Error and skips every sequential step."""
    error: Error

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    @property
    def value(self) -> NoReturn:
        raise ResultAccessError(f"Cannot read the value of a failed result: {self.error}")

    def unwrap(self) -> NoReturn:
        """Raises because Failure has no value to unwrap."""
        raise ResultAccessError(f"Called unwrap on Failure: {self.error}")

    def unwrap_error(self) -> Error:
        return self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[Error], T]) -> T:
        return invoke(f, self.error)

    def unwrap_or_raise(self) -> NoReturn:
        """Leave the railway by raising the error as ``ErrorException``."""
        raise ErrorException(self.error)

    def expect(self, msg: str) -> NoReturn:
        raise ResultAccessError(f"{msg}: {self.error}")

    def map(self, f: Callable[[Any], U]) -> Result[U]:
        """No-op for Failure."""
        return self

    def bind(self, f: Callable[[Any], Result[U]]) -> Result[U]:
        """No-op for Failure; the error is preserved unchanged."""
        return self

    and_then = bind

    def tap(self, f: Callable[..., Any]) -> Result[Any]:
        return self

    def tap_on_failure(self, f: Callable[..., Any]) -> Result[Any]:
        """Run ``f`` (with the error, if it takes one) for its side effect."""
        invoke(f, self.error)
        return self

    def ensure(self, predicate: Callable[[Any], bool], error: ErrorOrFactory) -> Result[Any]:
        return self

    def map_error(self, f: Callable[[Error], Error]) -> Result[Any]:
        """Transform the error."""
        return Failure(invoke(f, self.error))

    map_on_failure = map_error

    def when(self, condition: Any, f: Callable[[Any], Result[Any]]) -> Result[Any]:
        return self

    def unless(self, condition: Any, f: Callable[[Any], Result[Any]]) -> Result[Any]:
        return self

    def compensate(
        self,
        predicate_or_f: Callable[..., Any],
        f: Callable[..., Result[T]] | None = None,
    ) -> Result[T]:
        """Replace this failure with whatever the recovery produces.

        ``compensate(f)`` always recovers; ``compensate(predicate, f)`` only
        when ``predicate(error)`` holds, otherwise this failure is returned
        untouched. ``f`` may take the error or nothing.
        """
        if f is None:
            return invoke(predicate_or_f, self.error)
        if invoke(predicate_or_f, self.error):
            return invoke(f, self.error)
        return self

    recover_on_failure = compensate

    def combine(self, other: Result[U]) -> Result[Any]:
        from .combine import combine_pair
        return combine_pair(self, other)

    def match(self, on_success: Callable[[Any], U], on_failure: Callable[[Error], U]) -> U:
        return invoke(on_failure, self.error)

    def switch(self, on_success: Callable[[Any], Any], on_failure: Callable[[Error], Any]) -> None:
        invoke(on_failure, self.error)

    def match_error(
        self,
        on_success: Callable[[Any], U],
        *,
        on_validation: Callable[[ValidationError], U] | None = None,
        on_not_found: Callable[[NotFoundError], U] | None = None,
        on_conflict: Callable[[ConflictError], U] | None = None,
        on_bad_request: Callable[[BadRequestError], U] | None = None,
        on_unauthorized: Callable[[UnauthorizedError], U] | None = None,
        on_forbidden: Callable[[ForbiddenError], U] | None = None,
        on_domain: Callable[[DomainError], U] | None = None,
        on_rate_limit: Callable[[RateLimitError], U] | None = None,
        on_service_unavailable: Callable[[ServiceUnavailableError], U] | None = None,
        on_unexpected: Callable[[UnexpectedError], U] | None = None,
        on_aggregate: Callable[[AggregateError], U] | None = None,
        on_error: Callable[[Error], U] | None = None,
    ) -> U:
        """Dispatch on the error variant; ``on_error`` is the fallback."""
        error = self.error
        match error:
            case ValidationError() if on_validation is not None:
                return on_validation(error)
            case NotFoundError() if on_not_found is not None:
                return on_not_found(error)
            case ConflictError() if on_conflict is not None:
                return on_conflict(error)
            case BadRequestError() if on_bad_request is not None:
                return on_bad_request(error)
            case UnauthorizedError() if on_unauthorized is not None:
                return on_unauthorized(error)
            case ForbiddenError() if on_forbidden is not None:
                return on_forbidden(error)
            case DomainError() if on_domain is not None:
                return on_domain(error)
            case RateLimitError() if on_rate_limit is not None:
                return on_rate_limit(error)
            case ServiceUnavailableError() if on_service_unavailable is not None:
                return on_service_unavailable(error)
            case UnexpectedError() if on_unexpected is not None:
                return on_unexpected(error)
            case AggregateError() if on_aggregate is not None:
                return on_aggregate(error)
            case _ if on_error is not None:
                return on_error(error)
        raise ResultAccessError(f"No handler for {type(error).__name__} and no on_error fallback")

    async def map_async(self, f: Callable[[Any], Awaitable[U]]) -> Result[U]:
        """No-op for Failure."""
        return self

    async def bind_async(self, f: Callable[[Any], Awaitable[Result[U]]]) -> Result[U]:
        """No-op for Failure."""
        return self


# Type alias for the Result type
Result = Union[Success[T], Failure]


def success(value: T) -> Success[T]:
    """Construct Success variant."""
    return Success(value)


def success_unit() -> Success[Unit]:
    """Successful result carrying no payload."""
    return Success(UNIT)


def failure(error: ErrorOrFactory) -> Failure:
    """Construct Failure variant; ``error`` may be a nullary factory."""
    return Failure(error if isinstance(error, Error) else error())


def success_if(condition: bool, value: T, error: Error) -> Result[T]:
    """Success with ``value`` iff ``condition``, else failure with ``error``."""
    return Success(value) if condition else Failure(error)


def failure_if(condition: bool, value: T, error: Error) -> Result[T]:
    return success_if(not condition, value, error)


def _unexpected(exc: Exception) -> Error:
    return UnexpectedError(str(exc) or type(exc).__name__)


def from_exception(exc: Exception, mapper: Callable[[Exception], Error] | None = None) -> Failure:
    """Convert exception to Failure (UnexpectedError unless ``mapper`` says otherwise)."""
    return Failure((mapper or _unexpected)(exc))


def try_result(
    f: Callable[[], T],
    map_exception: Callable[[Exception], Error] | None = None,
) -> Result[T]:
    """Execute function and wrap result in a Result.

    The only combinator that catches: an ``Exception`` raised by ``f``
    becomes a Failure. ``BaseException`` (cancellation, exit) propagates.
    """
    try:
        return Success(f())
    except Exception as e:
        log.debug("exception_captured", error_type=type(e).__name__, error_message=str(e))
        return from_exception(e, map_exception)


async def try_result_async(
    f: Callable[[], Awaitable[T]],
    map_exception: Callable[[Exception], Error] | None = None,
) -> Result[T]:
    """Async variant of try_result."""
    try:
        return Success(await f())
    except Exception as e:
        log.debug("exception_captured", error_type=type(e).__name__, error_message=str(e))
        return from_exception(e, map_exception)


def is_result(obj: Any) -> bool:
    return isinstance(obj, (Success, Failure))
