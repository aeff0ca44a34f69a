"""
Lead store clients — read-all + single-record status update.

Two backends share the LeadStore contract:
  - SqlLeadStore      → SQLAlchemy session against DATABASE_URL
  - SupabaseLeadStore → Supabase REST (PostgREST) over requests

Every remote failure is raised as StoreUnavailable. Neither backend returns
the updated record; the controller mirrors the change itself.
"""
import logging
from abc import ABC, abstractmethod
from typing import List

import requests
from sqlalchemy.exc import SQLAlchemyError

from mission_control.config import (
    STORE_BACKEND, SUPABASE_URL, SUPABASE_KEY, SUPABASE_TABLE, STORE_TIMEOUT,
)
from mission_control.database import get_session
from mission_control.errors import StoreUnavailable
from mission_control.models.db_lead import DbLead
from mission_control.models.lead import Lead, leads_from_records

logger = logging.getLogger('services.store')


class LeadStore(ABC):
    """Read/update contract against the persistent lead store."""

    name: str = ''

    @abstractmethod
    def fetch_all(self) -> List[Lead]:
        """All leads, newest first. Raises StoreUnavailable."""
        ...

    @abstractmethod
    def update_status(self, lead_id: str, new_status: str) -> None:
        """Persist new_status on the one record with lead_id. Raises StoreUnavailable."""
        ...


class SqlLeadStore(LeadStore):
    name = 'sql'

    def fetch_all(self) -> List[Lead]:
        session = get_session()
        try:
            rows = session.query(DbLead).order_by(DbLead.created_at.desc()).all()
            return leads_from_records(row.to_record() for row in rows)
        except SQLAlchemyError as e:
            logger.error("Failed to fetch leads", exc_info=True)
            raise StoreUnavailable('fetch_all', str(e)) from e
        finally:
            session.close()

    def update_status(self, lead_id: str, new_status: str) -> None:
        session = get_session()
        try:
            updated = (
                session.query(DbLead)
                .filter(DbLead.id == lead_id)
                .update({DbLead.status: new_status}, synchronize_session=False)
            )
            session.commit()
            if not updated:
                logger.warning("Status update matched no row", extra={'lead_id': lead_id})
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to update lead %s", lead_id, exc_info=True)
            raise StoreUnavailable('update_status', str(e)) from e
        finally:
            session.close()


class SupabaseLeadStore(LeadStore):
    """
    Supabase table access through its REST endpoint.

    GET   /rest/v1/{table}?select=*&order=created_at.desc
    PATCH /rest/v1/{table}?id=eq.{id}   body: {"status": ...}
    """

    name = 'supabase'

    def __init__(self, base_url: str, api_key: str, table: str = 'leads', timeout: float = 15):
        self.base_url = (base_url or '').rstrip('/')
        self.api_key = api_key
        self.table = table
        self.timeout = timeout

    @property
    def _endpoint(self):
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self):
        return {
            'apikey': self.api_key,
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }

    def fetch_all(self) -> List[Lead]:
        try:
            resp = requests.get(
                self._endpoint,
                params={'select': '*', 'order': 'created_at.desc'},
                headers=self._headers(),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            rows = resp.json()
        except requests.JSONDecodeError as e:
            logger.error("Supabase returned a non-JSON body")
            raise StoreUnavailable('fetch_all', 'invalid JSON response') from e
        except requests.RequestException as e:
            logger.error("Supabase fetch failed: %s", e)
            raise StoreUnavailable('fetch_all', str(e)) from e

        if not isinstance(rows, list):
            raise StoreUnavailable('fetch_all', 'unexpected response shape')
        return leads_from_records(rows)

    def update_status(self, lead_id: str, new_status: str) -> None:
        try:
            resp = requests.patch(
                self._endpoint,
                params={'id': f'eq.{lead_id}'},
                json={'status': new_status},
                headers={**self._headers(), 'Prefer': 'return=minimal'},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Supabase update failed for lead %s: %s", lead_id, e)
            raise StoreUnavailable('update_status', str(e)) from e


def build_store(backend: str = None) -> LeadStore:
    """Instantiate the configured store backend."""
    backend = (backend or STORE_BACKEND).lower()
    if backend == 'sql':
        return SqlLeadStore()
    if backend == 'supabase':
        if not SUPABASE_URL or not SUPABASE_KEY:
            raise ValueError("STORE_BACKEND=supabase requires SUPABASE_URL and SUPABASE_KEY")
        return SupabaseLeadStore(SUPABASE_URL, SUPABASE_KEY, table=SUPABASE_TABLE, timeout=STORE_TIMEOUT)
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")
