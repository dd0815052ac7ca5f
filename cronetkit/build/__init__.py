"""
Native build orchestration: GN argument synthesis, GN/Ninja invocation and
per-target result handling.
"""

from cronetkit.build.gn_args import (
    BASELINE_ARGS,
    OVERLAYS,
    BuildConfiguration,
    synthesize,
)
from cronetkit.build.invoker import BuildInvoker
from cronetkit.build.results import (
    PipelineReport,
    TargetResult,
    iter_results,
    run_collect_all,
    run_fail_fast,
)

__all__ = [
    "BASELINE_ARGS",
    "OVERLAYS",
    "BuildConfiguration",
    "synthesize",
    "BuildInvoker",
    "PipelineReport",
    "TargetResult",
    "iter_results",
    "run_collect_all",
    "run_fail_fast",
]
