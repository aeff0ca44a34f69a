"""
Lead value object + workflow transition table.

A Lead is a read-mostly replica of one store record. It is frozen: the only
local change the console ever makes is with_status(), which returns a copy.
"""
import logging
from dataclasses import dataclass, asdict, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from mission_control.config import LEAD_STATUSES

logger = logging.getLogger('models.lead')


# ── Workflow ─────────────────────────────────────────────────────────────────
# (current status, action) → next status

TRANSITIONS = {
    ('new', 'approve'): 'approved',
    ('new', 'reject'): 'rejected',
    ('approved', 'mark-sent'): 'contacted',
}

ACTIONS = ['approve', 'reject', 'mark-sent']

TERMINAL_STATUSES = ('rejected', 'contacted')


def allowed_actions(status: str) -> List[str]:
    """Actions the console may offer for a lead in this status."""
    return [action for action in ACTIONS if (status, action) in TRANSITIONS]


def is_allowed(current: str, new_status: str) -> bool:
    """True if current → new_status is an edge of the workflow."""
    return any(cur == current and nxt == new_status for (cur, _), nxt in TRANSITIONS.items())


def next_status(current: str, action: str) -> Optional[str]:
    """Status reached by applying action from current, or None if not allowed."""
    return TRANSITIONS.get((current, action))


# ── Lead ─────────────────────────────────────────────────────────────────────

def _parse_timestamp(value) -> Optional[datetime]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True)
class Lead:
    id: str
    platform: str
    content: str
    url: str
    score: str
    intent: str
    context: str
    outreach: str
    status: str
    created_at: Optional[datetime]

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Lead':
        """
        Build a Lead from a store row (DB mapping or REST JSON).

        Raises ValueError if the row has no id or an unknown status.
        """
        if record.get('id') is None:
            raise ValueError("Lead record has no id")
        status = record.get('status') or 'new'
        if status not in LEAD_STATUSES:
            raise ValueError(f"Lead {record['id']} has unknown status '{status}'")
        return cls(
            id=str(record['id']),
            platform=record.get('platform') or '',
            content=record.get('content') or '',
            url=record.get('url') or '',
            score=record.get('score') or '',
            intent=record.get('intent') or '',
            context=record.get('context') or '',
            outreach=record.get('outreach') or '',
            status=status,
            created_at=_parse_timestamp(record.get('created_at')),
        )

    @property
    def is_high_interest(self) -> bool:
        return self.score == 'high'

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def actions(self) -> List[str]:
        return allowed_actions(self.status)

    def with_status(self, status: str) -> 'Lead':
        """Copy of this lead with only the status changed."""
        return replace(self, status=status)

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        return data


def leads_from_records(records) -> List[Lead]:
    """Convert store rows, skipping (and logging) rows that fail validation."""
    leads = []
    for record in records:
        try:
            leads.append(Lead.from_record(record))
        except ValueError as e:
            logger.warning("Skipping malformed lead record: %s", e)
    return leads
