"""
Resolve pipeline

A resolve request runs through an ordered chain of middleware grouped by
phase. Each middleware receives the mutable ResolveRequestContext and a
``next`` callable that continues the chain. Activators register themselves
at the end of the ACTIVATION phase and write the produced instance into
the context.

Example::

    builder = ResolvePipelineBuilder()
    activator.configure(builder)
    pipeline = builder.build()

    ctx = pipeline.invoke(ResolveRequestContext(container, Widget))
    widget = ctx.instance
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .context import ComponentContext
from .parameters import Parameter


class PipelinePhase(IntEnum):
    """Phases of a resolve request, in execution order"""
    RESOLVE_REQUEST_START = 0
    SCOPE_SELECTION = 1
    SHARING = 2
    ACTIVATION = 3


class MiddlewareInsertionMode(Enum):
    """Where a middleware is inserted within its phase"""
    END_OF_PHASE = "END_OF_PHASE"
    START_OF_PHASE = "START_OF_PHASE"


@dataclass
class ResolveRequestContext:
    """Per-request state shared by the middleware of one resolve call"""
    component_context: Optional[ComponentContext]
    service: Any = None
    parameters: List[Parameter] = field(default_factory=list)
    instance: Any = None


Next = Callable[[ResolveRequestContext], None]
MiddlewareCallback = Callable[[ResolveRequestContext, Next], None]


@dataclass(frozen=True)
class Middleware:
    """A named pipeline step"""
    name: str
    phase: PipelinePhase
    callback: MiddlewareCallback

    def __call__(self, ctx: ResolveRequestContext, nxt: Next) -> None:
        self.callback(ctx, nxt)


class ResolvePipeline:
    """An immutable, ordered middleware chain."""

    def __init__(self, middleware: Sequence[Middleware]):
        self._middleware: Tuple[Middleware, ...] = tuple(middleware)

    @property
    def middleware(self) -> Tuple[Middleware, ...]:
        return self._middleware

    def invoke(self, ctx: ResolveRequestContext) -> ResolveRequestContext:
        """Run the chain around a no-op terminal and return the context."""
        def call_at(i: int) -> Callable[[ResolveRequestContext], None]:
            if i >= len(self._middleware):
                return lambda _ctx: None

            mw = self._middleware[i]

            def nxt(c: ResolveRequestContext) -> None:
                mw(c, call_at(i + 1))

            return nxt

        call_at(0)(ctx)
        return ctx


class ResolvePipelineBuilder:
    """Collects middleware by phase and builds a ResolvePipeline."""

    def __init__(self):
        self._phases: Dict[PipelinePhase, List[Middleware]] = {phase: [] for phase in PipelinePhase}

    def use(
        self,
        name: str,
        phase: PipelinePhase,
        mode: MiddlewareInsertionMode,
        callback: MiddlewareCallback,
    ) -> 'ResolvePipelineBuilder':
        """Add a middleware step.

        Args:
            name: Display name of the step
            phase: Phase the step belongs to
            mode: Insert at the start or the end of the phase
            callback: ``(ctx, next) -> None``; call ``next(ctx)`` to continue

        Returns:
            This builder, for chaining
        """
        middleware = Middleware(name, phase, callback)
        if mode is MiddlewareInsertionMode.START_OF_PHASE:
            self._phases[phase].insert(0, middleware)
        else:
            self._phases[phase].append(middleware)
        return self

    def build(self) -> ResolvePipeline:
        return ResolvePipeline([mw for phase in PipelinePhase for mw in self._phases[phase]])
