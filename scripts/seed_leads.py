#!/usr/bin/env python3
"""
Seed demo leads for trying the console locally.

Creates leads in every workflow status across both platforms, so each filter
and every per-lead action has something to show.

Usage:
    python scripts/seed_leads.py          # seed demo leads
    python scripts/seed_leads.py --clear  # wipe seeded leads first

Requires: DATABASE_URL set (or defaults to sqlite:///local.db).
"""
import sys
import os
import uuid
import argparse
from datetime import datetime, timezone, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mission_control.database import get_session, create_tables
from mission_control.models.db_lead import DbLead


DEMO_LEADS = [
    {'platform': 'reddit', 'score': 'high', 'intent': 'hiring', 'status': 'new',
     'content': 'Looking for someone to build a Shopify integration for our store, budget is flexible.',
     'context': 'Store owner with an explicit build request and budget.',
     'outreach': 'Hi! We build Shopify integrations regularly and would be glad to scope this with you.'},
    {'platform': 'reddit', 'score': 'medium', 'intent': 'question', 'status': 'new',
     'content': 'What tools do you all use to automate lead follow-ups?',
     'context': 'General tooling question, early-stage buyer.',
     'outreach': 'We automate follow-ups for small teams, happy to share what has worked for us.'},
    {'platform': 'facebook', 'score': 'high', 'intent': 'hiring', 'status': 'approved',
     'content': 'Our agency needs a developer for a landing page rebuild this month.',
     'context': 'Agency with a near-term, scoped project.',
     'outreach': 'Hello! We have rebuilt several agency landing pages and can start this week.'},
    {'platform': 'facebook', 'score': 'low', 'intent': 'complaint', 'status': 'rejected',
     'content': 'Anyone else annoyed by how slow website builders are?',
     'context': 'Venting post, no buying intent.',
     'outreach': ''},
    {'platform': 'reddit', 'score': 'high', 'intent': 'hiring', 'status': 'contacted',
     'content': 'Need help migrating a WordPress site to a headless setup.',
     'context': 'Clear migration project, technical buyer.',
     'outreach': 'Hi! Headless migrations are our specialty, here is how we usually approach them.'},
]

# Prefix for seeded IDs so we can clear them
SEED_PREFIX = 'seed-'


def seed(session):
    now = datetime.now(timezone.utc)
    for idx, data in enumerate(DEMO_LEADS):
        session.add(DbLead(
            id=SEED_PREFIX + str(uuid.uuid4()),
            url=f"https://example.com/{data['platform']}/post/{idx}",
            created_at=now - timedelta(hours=idx * 5),
            **data,
        ))
    session.commit()
    print(f"Seeded {len(DEMO_LEADS)} leads")


def clear(session):
    deleted = session.query(DbLead).filter(DbLead.id.like(f'{SEED_PREFIX}%')).delete(synchronize_session=False)
    session.commit()
    print(f"Cleared {deleted} seeded leads")


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('--clear', action='store_true', help='delete previously seeded leads first')
    args = parser.parse_args()

    create_tables()
    session = get_session()
    try:
        if args.clear:
            clear(session)
        seed(session)
    finally:
        session.close()


if __name__ == '__main__':
    main()
