"""Sequential runner that executes scenarios in isolated sessions."""

from __future__ import annotations

import logging
import time
from typing import List, Optional

from ..config import SuiteConfig
from ..lifecycle import SessionFactory, scenario_session
from ..models import NotificationEvent, NotificationLevel, ScenarioResult, ScenarioStatus
from ..notifications.base import Notifier
from ..pages.map_page import MapPage
from ..scenarios import Scenario, get_scenarios

LOGGER = logging.getLogger(__name__)


class ScenarioRunner:
    """Runs each scenario with its own browser session and records the outcome."""

    def __init__(
        self,
        config: SuiteConfig,
        session_factory: SessionFactory,
        notifier: Notifier,
    ) -> None:
        self._config = config
        self._session_factory = session_factory
        self._notifier = notifier

    def run(self, names: Optional[List[str]] = None) -> List[ScenarioResult]:
        """Run the selected scenarios (all by default) in order."""

        scenarios = get_scenarios(names)
        LOGGER.info("Running %d scenario(s)", len(scenarios))
        results = [self.run_one(item) for item in scenarios]
        failed = [result for result in results if not result.passed]
        self._notifier.notify(
            NotificationEvent(
                type="run_finished",
                message=f"{len(results) - len(failed)} passed, {len(failed)} failed",
                level=NotificationLevel.ERROR if failed else NotificationLevel.SUCCESS,
                data={"failed": [result.name for result in failed]} if failed else {},
            )
        )
        return results

    def run_one(self, scenario: Scenario) -> ScenarioResult:
        self._notifier.notify(
            NotificationEvent(
                type="scenario_started",
                message=f"Running {scenario.name}: {scenario.description}",
            )
        )
        started = time.monotonic()
        try:
            with scenario_session(self._session_factory) as session:
                scenario(MapPage(session), self._config)
        except Exception as exc:
            LOGGER.debug("Scenario %s failed", scenario.name, exc_info=True)
            result = ScenarioResult(
                name=scenario.name,
                status=ScenarioStatus.FAILED,
                message=str(exc) or type(exc).__name__,
                duration=time.monotonic() - started,
            )
            self._notifier.notify(
                NotificationEvent(
                    type="scenario_failed",
                    message=f"{scenario.name} failed: {result.message}",
                    level=NotificationLevel.ERROR,
                )
            )
            return result
        result = ScenarioResult(
            name=scenario.name,
            status=ScenarioStatus.PASSED,
            duration=time.monotonic() - started,
        )
        self._notifier.notify(
            NotificationEvent(
                type="scenario_passed",
                message=f"{scenario.name} passed in {result.duration:.1f}s",
                level=NotificationLevel.SUCCESS,
            )
        )
        return result
