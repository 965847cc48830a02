# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Description: HealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass

from health.TestRunner import TestRunner
from api.schemas.health import DeepHealthResponse, SmokeTestSummary


@dataclass
class HealthService:
    """
    Wraps TestRunner, which checks the vector index, record store
    and embedding generator.
    Returns DeepHealthResponse for API layer
    """

    test_runner: TestRunner

    def deep_health(self, run_heavy_embedding: bool = False) -> DeepHealthResponse:
        results = self.test_runner.run_all(run_heavy_embedding=run_heavy_embedding)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        overall_status = "ok" if failed == 0 else "error"

        summary = SmokeTestSummary(
            total=total,
            passed=passed,
            failed=failed,
        )

        return DeepHealthResponse(
            status=overall_status,
            results=results,
            summary=summary,
        )
