"""
Resolve Pipeline Tests

Tests for middleware ordering by phase and insertion mode.
"""

import unittest

from bindwire import (
    MiddlewareInsertionMode,
    PipelinePhase,
    ResolvePipelineBuilder,
    ResolveRequestContext,
)


def recorder(log, name):
    def middleware(ctx, nxt):
        log.append(name)
        nxt(ctx)
    return middleware


class TestResolvePipeline(unittest.TestCase):
    """ResolvePipelineBuilder and ResolvePipeline"""

    def test_phases_run_in_order(self):
        log = []
        builder = ResolvePipelineBuilder()
        builder.use("activate", PipelinePhase.ACTIVATION,
                    MiddlewareInsertionMode.END_OF_PHASE, recorder(log, "activate"))
        builder.use("start", PipelinePhase.RESOLVE_REQUEST_START,
                    MiddlewareInsertionMode.END_OF_PHASE, recorder(log, "start"))
        builder.use("share", PipelinePhase.SHARING,
                    MiddlewareInsertionMode.END_OF_PHASE, recorder(log, "share"))

        builder.build().invoke(ResolveRequestContext(None))

        self.assertEqual(log, ["start", "share", "activate"])

    def test_insertion_mode_within_phase(self):
        log = []
        builder = ResolvePipelineBuilder()
        builder.use("b", PipelinePhase.ACTIVATION,
                    MiddlewareInsertionMode.END_OF_PHASE, recorder(log, "b"))
        builder.use("c", PipelinePhase.ACTIVATION,
                    MiddlewareInsertionMode.END_OF_PHASE, recorder(log, "c"))
        builder.use("a", PipelinePhase.ACTIVATION,
                    MiddlewareInsertionMode.START_OF_PHASE, recorder(log, "a"))

        pipeline = builder.build()
        pipeline.invoke(ResolveRequestContext(None))

        self.assertEqual([m.name for m in pipeline.middleware], ["a", "b", "c"])
        self.assertEqual(log, ["a", "b", "c"])

    def test_middleware_can_short_circuit(self):
        log = []

        def stop(ctx, nxt):
            ctx.instance = "cached"

        builder = ResolvePipelineBuilder()
        builder.use("stop", PipelinePhase.SHARING, MiddlewareInsertionMode.END_OF_PHASE, stop)
        builder.use("activate", PipelinePhase.ACTIVATION,
                    MiddlewareInsertionMode.END_OF_PHASE, recorder(log, "activate"))

        ctx = builder.build().invoke(ResolveRequestContext(None))

        self.assertEqual(ctx.instance, "cached")
        self.assertEqual(log, [])

    def test_empty_pipeline(self):
        ctx = ResolvePipelineBuilder().build().invoke(ResolveRequestContext(None, service=int))

        self.assertIsNone(ctx.instance)
        self.assertEqual(ctx.parameters, [])


if __name__ == '__main__':
    unittest.main()
