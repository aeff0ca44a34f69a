"""
Lifecycle Controller — the three operator operations plus filtering.

  refresh()                 → fetch_all, swap the whole in-memory set
  run_collection(platform)  → trigger job (one at a time), then refresh
  change_status(id, status) → remote write, then mirror it locally
  filter(selector)          → read-only projection, no store access

Every failure is logged, recorded as a Notice on the state and re-raised as
its typed ConsoleError. A failed operation never leaves the lead set
partially updated.

Optimistic update gap: after change_status() the local copy is trusted
without reading the record back. A concurrent change from elsewhere stays
invisible until the next refresh().
"""
import logging
import threading
from typing import Callable, List, Optional, Sequence

from mission_control.config import COLLECTOR_PLATFORMS
from mission_control.console.state import LeadViewState, Notice
from mission_control.errors import (
    ConsoleError, StoreUnavailable, TriggerUnavailable, CollectionInProgress,
    UnknownPlatform, LeadNotFound, InvalidTransition,
)
from mission_control.models.lead import Lead, is_allowed, next_status
from mission_control.services.collector import CollectionResult

logger = logging.getLogger('console.controller')


class LifecycleController:

    def __init__(
        self,
        store,
        collector,
        state: LeadViewState = None,
        platforms: Sequence[str] = None,
        on_collected: Optional[Callable[[CollectionResult], None]] = None,
    ):
        self.store = store
        self.collector = collector
        self.state = state if state is not None else LeadViewState()
        self.platforms = list(platforms if platforms is not None else COLLECTOR_PLATFORMS)
        self.on_collected = on_collected
        # Serializes store writes and refreshes: refresh always lands after a write.
        self._write_lock = threading.RLock()
        # Held for the whole of a collection run.
        self._collect_lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._collect_lock.locked()

    def _fail(self, error: ConsoleError, message: str = None):
        self.state.add_notice(Notice('error', message or str(error), type(error).__name__))
        raise error

    # ── refresh ───────────────────────────────────────────────────────

    def refresh(self) -> List[Lead]:
        """Replace the in-memory set with the store's current contents."""
        with self._write_lock:
            self.state.loading = True
            try:
                leads = self.store.fetch_all()
            except StoreUnavailable as e:
                logger.error("Refresh failed, keeping %d cached leads: %s", len(self.state.leads), e)
                self._fail(e, f"Could not load leads: {e.reason or e}")
            finally:
                self.state.loading = False
            self.state.replace_all(leads)
        logger.info("Refreshed %d leads", len(leads))
        return list(leads)

    # ── collection ────────────────────────────────────────────────────

    def run_collection(self, platform: str) -> CollectionResult:
        """
        Trigger the collection job for platform, then refresh.

        Only one run may be in flight; a second request while one is pending
        raises CollectionInProgress and leaves the running one untouched.
        A refresh failure after a successful run is recorded as its own
        notice and does not fail the collection.
        """
        if platform not in self.platforms:
            self._fail(UnknownPlatform(platform))

        if not self._collect_lock.acquire(blocking=False):
            running = self.state.collecting or 'another platform'
            logger.warning("Rejected collection for %s while %s is running", platform, running)
            self._fail(CollectionInProgress(platform, running))

        try:
            self.state.collecting = platform
            try:
                result = self.collector.trigger(platform)
            except TriggerUnavailable as e:
                logger.error("Collection job failed: %s", e, extra={'platform': platform})
                self._fail(e, f"Failed to reach the {platform} collection job "
                              f"({e.reason or 'unknown error'}). Is the collector running?")

            logger.info("Collection finished", extra={'platform': platform, 'leads_saved': result.leads_saved})
            self.state.add_notice(Notice('info', f"Collection finished! Saved {result.leads_saved} new leads."))
            try:
                self.refresh()
            except StoreUnavailable:
                pass  # already recorded as a notice by refresh()
        finally:
            self.state.collecting = None
            self._collect_lock.release()

        # runs once the new leads are visible and the next run is allowed
        if self.on_collected:
            self.on_collected(result)
        return result

    # ── status changes ────────────────────────────────────────────────

    def change_status(self, lead_id: str, new_status: str) -> Lead:
        """
        Move one lead to new_status: store write first, local mirror second.

        The precondition is checked against the in-memory copy before the
        store is contacted; a rejected request touches nothing.
        """
        with self._write_lock:
            lead = self.state.find(lead_id)
            if lead is None:
                self._fail(LeadNotFound(lead_id))
            if not is_allowed(lead.status, new_status):
                logger.warning("Rejected transition %s → %s", lead.status, new_status,
                               extra={'lead_id': lead_id})
                self._fail(InvalidTransition(lead_id, lead.status, new_status))

            try:
                self.store.update_status(lead_id, new_status)
            except StoreUnavailable as e:
                logger.error("Status update failed: %s", e, extra={'lead_id': lead_id, 'status': new_status})
                self._fail(e, f"Could not update lead: {e.reason or e}")

            updated = lead.with_status(new_status)
            self.state.replace_lead(updated)

        logger.info("Lead status changed", extra={'lead_id': lead_id, 'status': new_status})
        return updated

    def apply_action(self, lead_id: str, action: str) -> Lead:
        """Resolve an operator action (approve / reject / mark-sent) and apply it."""
        lead = self.state.find(lead_id)
        if lead is None:
            self._fail(LeadNotFound(lead_id))
        target = next_status(lead.status, action)
        if target is None:
            self._fail(InvalidTransition(lead_id, lead.status, action))
        return self.change_status(lead_id, target)

    # ── filtering ─────────────────────────────────────────────────────

    def filter(self, selector: str = None) -> List[Lead]:
        return self.state.filtered(selector)

    def set_filter(self, selector: str) -> List[Lead]:
        self.state.set_filter(selector)
        return self.state.filtered()
