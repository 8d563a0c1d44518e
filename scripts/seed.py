#!/usr/bin/env python3
# =============================================================================
# scripts/seed.py - Demo Data Seeder
# =============================================================================
# Fills an empty database with two demo users and 30 projects of 30 tasks
# each. Both users log in with the password "password".
#
# Usage:
#   poetry run python scripts/seed.py
#   poetry run python scripts/seed.py --projects 5 --tasks 3
# =============================================================================

import argparse
import logging
import os
import random
import sys
from datetime import date, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.models.common import Status
from core.services.user_service import hash_password
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger("seed")

DEMO_USERS = [
    {"name": "Zoltan Kovacs", "email": "zoltan1_kovacs@msn.com"},
    {"name": "Ildiko Volgyes", "email": "volgyes_ildikos@msn.com"},
]
DEMO_PASSWORD = "password"

PROJECT_WORDS = ["Apollo", "Beacon", "Cobalt", "Delta", "Ember", "Falcon", "Granite", "Harbor"]
TASK_VERBS = ["Design", "Review", "Draft", "Test", "Ship", "Plan", "Refine", "Document"]
TASK_NOUNS = ["landing page", "API", "budget", "copy", "onboarding", "release notes", "schema"]


def _due_date(rng: random.Random) -> str:
    return (date.today() + timedelta(days=rng.randint(-30, 120))).isoformat()


def seed_users() -> list[dict]:
    users = []
    for demo in DEMO_USERS:
        existing = SupabaseClient.fetch_one_by("users", "email", demo["email"])
        if existing:
            users.append(existing)
            continue
        users.append(SupabaseClient.insert("users", {
            **demo,
            "password": hash_password(DEMO_PASSWORD),
            "email_verified_at": utc_now_iso(),
        }))
    return users


def seed_projects(users: list[dict], project_count: int, task_count: int, rng: random.Random) -> None:
    statuses = Status.values()
    user_ids = [user["id"] for user in users]

    for index in range(project_count):
        owner = rng.choice(user_ids)
        project = SupabaseClient.insert("projects", {
            "name": f"{rng.choice(PROJECT_WORDS)} {index + 1}",
            "description": "Seeded demo project",
            "due_date": _due_date(rng),
            "status": rng.choice(statuses),
            "created_by": owner,
            "updated_by": owner,
        })

        tasks = []
        for _ in range(task_count):
            creator = rng.choice(user_ids)
            tasks.append({
                "name": f"{rng.choice(TASK_VERBS)} {rng.choice(TASK_NOUNS)}",
                "description": "Seeded demo task",
                "due_date": _due_date(rng),
                "status": rng.choice(statuses),
                "project_id": project["id"],
                "assigned_user_id": rng.choice(user_ids),
                "created_by": creator,
                "updated_by": creator,
            })
        if tasks:
            SupabaseClient.get_client().table("tasks").insert(tasks).execute()

        logger.info(f"Seeded project {project['id']} with {len(tasks)} tasks")


def main():
    parser = argparse.ArgumentParser(description="Seed demo users, projects and tasks")
    parser.add_argument("--projects", type=int, default=30)
    parser.add_argument("--tasks", type=int, default=30, help="Tasks per project")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    rng = random.Random(args.seed)
    users = seed_users()
    seed_projects(users, args.projects, args.tasks, rng)

    print(f"Seeded {len(users)} users and {args.projects} projects")
    print(f"Log in as {DEMO_USERS[0]['email']} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
