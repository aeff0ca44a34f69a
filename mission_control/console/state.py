"""
Lead View State — the console's in-memory replica of the lead store.

Holds the current lead set, the active status filter, transient operation
flags and the notices waiting to be shown to the operator. Owned by one
LifecycleController; nothing here talks to the network.

The lead set is kept as a tuple of frozen Lead objects and swapped wholesale,
so readers (filter views) always see a consistent snapshot without locking.
"""
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from mission_control.config import DEFAULT_FILTER, FILTER_ALL, FILTER_OPTIONS
from mission_control.models.lead import Lead


@dataclass(frozen=True)
class Notice:
    """Operator-facing message produced by a controller operation."""
    level: str            # 'info' | 'error'
    message: str
    error: Optional[str] = None  # exception class name for failures

    def to_dict(self):
        return {'level': self.level, 'message': self.message, 'error': self.error}


def validate_filter(selector: str) -> str:
    if selector not in FILTER_OPTIONS:
        raise ValueError(f"Unknown status filter: {selector}. Available: {FILTER_OPTIONS}")
    return selector


class LeadViewState:

    def __init__(self, leads: Iterable[Lead] = (), active_filter: str = DEFAULT_FILTER):
        self._leads: Tuple[Lead, ...] = tuple(leads)
        self.active_filter = validate_filter(active_filter)
        self.loading = False
        self.loaded = False
        self.collecting: Optional[str] = None  # platform of the run in flight
        self.last_refreshed_at: Optional[datetime] = None
        self._notices: List[Notice] = []
        self._notice_lock = threading.Lock()

    # ── Lead set ──────────────────────────────────────────────────────

    @property
    def leads(self) -> Tuple[Lead, ...]:
        return self._leads

    def replace_all(self, leads: Iterable[Lead]):
        """Swap in a freshly fetched set."""
        self._leads = tuple(leads)
        self.loaded = True
        self.last_refreshed_at = datetime.now(timezone.utc)

    def find(self, lead_id: str) -> Optional[Lead]:
        for lead in self._leads:
            if lead.id == lead_id:
                return lead
        return None

    def replace_lead(self, updated: Lead) -> bool:
        """Replace the lead with updated.id in place. False if it is not held."""
        current = self._leads
        for idx, lead in enumerate(current):
            if lead.id == updated.id:
                self._leads = current[:idx] + (updated,) + current[idx + 1:]
                return True
        return False

    # ── Filtering ─────────────────────────────────────────────────────

    def filtered(self, selector: Optional[str] = None) -> List[Lead]:
        """Leads matching selector (default: the active filter), order preserved."""
        selector = validate_filter(selector or self.active_filter)
        snapshot = self._leads
        if selector == FILTER_ALL:
            return list(snapshot)
        return [lead for lead in snapshot if lead.status == selector]

    def set_filter(self, selector: str):
        self.active_filter = validate_filter(selector)

    def counts(self):
        """Lead count per filter option, for the selector badges."""
        snapshot = self._leads
        result = {option: 0 for option in FILTER_OPTIONS}
        for lead in snapshot:
            result[lead.status] = result.get(lead.status, 0) + 1
        result[FILTER_ALL] = len(snapshot)
        return result

    # ── Notices ───────────────────────────────────────────────────────

    def add_notice(self, notice: Notice):
        with self._notice_lock:
            self._notices.append(notice)

    def drain_notices(self) -> List[Notice]:
        """Return pending notices and clear them."""
        with self._notice_lock:
            pending, self._notices = self._notices, []
        return pending
