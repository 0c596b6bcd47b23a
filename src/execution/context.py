"""
Per-invocation execution context handed to the GraphQL engine.

The context is passed explicitly as the engine's ``context_value``;
resolvers read the user, the request and the invocation cache from
``info.context`` instead of module globals.
"""

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from graphql import ExecutionResult

from src.exceptions import ContextLifecycleError
from src.models.query import QueryRequest
from src.utils.invocation_cache import InvocationCache, invocation_cache

U = TypeVar("U")

CompletionCallback = Callable[["asyncio.Future[ExecutionResult]"], Any]


class ContextState(str, Enum):
    """Lifecycle of an execution context."""

    CREATED = "created"
    STARTED = "started"


class GraphQLContext(Generic[U]):
    """
    Base execution context.

    Deployments subclass it to carry their own request scoped state and
    override :meth:`on_start` to hook into the in-flight execution.

    Attributes:
        user: Authenticated identity returned by the validator
        query: The query request being executed
        cache: Process-wide invocation cache, evicted after the invocation
        execution: In-flight execution handle, set by :meth:`start`
    """

    def __init__(
        self,
        user: U,
        query: QueryRequest,
        cache: Optional[InvocationCache] = None,
    ) -> None:
        self.user = user
        self.query = query
        self.cache = cache if cache is not None else invocation_cache
        self.execution: Optional["asyncio.Future[ExecutionResult]"] = None
        self._state = ContextState.CREATED
        self._pending_callbacks: List[CompletionCallback] = []

    @property
    def state(self) -> ContextState:
        return self._state

    @property
    def started(self) -> bool:
        return self._state is ContextState.STARTED

    def start(self, execution: "asyncio.Future[ExecutionResult]") -> None:
        """
        Mark the context started with the dispatched execution.

        Called once by the request adapter after dispatch and before the
        result is awaited. The handle may still be pending.

        Args:
            execution: Future or task producing the execution result

        Raises:
            ContextLifecycleError: If the context was already started
        """
        if self._state is not ContextState.CREATED:
            raise ContextLifecycleError(
                details={"state": self._state.value}
            )
        self._state = ContextState.STARTED
        self.execution = execution

        for callback in self._pending_callbacks:
            execution.add_done_callback(callback)
        self._pending_callbacks.clear()

        self.on_start(execution)

    def on_start(self, execution: "asyncio.Future[ExecutionResult]") -> None:
        """Hook for subclasses. Must not block."""

    def add_completion_callback(self, callback: CompletionCallback) -> None:
        """
        Run ``callback(future)`` once the execution completes.

        Callbacks added before :meth:`start` are attached when the
        execution is dispatched.
        """
        if self.execution is None:
            self._pending_callbacks.append(callback)
        else:
            self.execution.add_done_callback(callback)
