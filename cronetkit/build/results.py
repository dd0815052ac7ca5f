"""
Per-target results for sequential multi-target runs.

``iter_results`` applies one step to each target lazily and yields a
TargetResult per target. The consumer picks the policy: stop at the first
failure (nothing after it is executed, because the generator is never
advanced) or drain the iterator and collect every outcome.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, List, Optional

from cronetkit.core.exceptions import CronetKitError
from cronetkit.cross.targets import Target


@dataclass
class TargetResult:
    """Outcome of one step for one target."""

    target: Target
    value: Any = None
    error: Optional[CronetKitError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class PipelineReport:
    """Aggregated results of a multi-target run."""

    results: List[TargetResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[Target]:
        return [r.target for r in self.results if r.ok]

    @property
    def failed(self) -> List[TargetResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def raise_first(self) -> None:
        """Re-raise the first recorded failure, if any."""
        for result in self.results:
            if result.error is not None:
                raise result.error

    def summary(self) -> str:
        return f"{len(self.succeeded)} succeeded, {len(self.failed)} failed"


def iter_results(
    targets: Iterable[Target], step: Callable[[Target], Any]
) -> Iterator[TargetResult]:
    """
    Lazily run ``step`` for each target.

    Only CronetKitError is captured as a failed result; anything else is a
    programming error and propagates.
    """
    for target in targets:
        try:
            value = step(target)
        except CronetKitError as e:
            yield TargetResult(target, error=e)
        else:
            yield TargetResult(target, value=value)


def run_fail_fast(
    targets: Iterable[Target], step: Callable[[Target], Any]
) -> PipelineReport:
    """Run ``step`` per target, raising the first error and skipping the rest."""
    report = PipelineReport()
    for result in iter_results(targets, step):
        report.results.append(result)
        if not result.ok:
            raise result.error
    return report


def run_collect_all(
    targets: Iterable[Target], step: Callable[[Target], Any]
) -> PipelineReport:
    """Run ``step`` for every target and return all results."""
    return PipelineReport(results=list(iter_results(targets, step)))
