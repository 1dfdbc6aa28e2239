from __future__ import annotations

import random

from faker import Faker

from data.models import STATUSES


fake = Faker()


def todos_mock(n: int = 5) -> list[dict]:
    """Deterministic seed records: the same ids and tasks on every start."""
    Faker.seed(7)
    random.seed(7)
    rows = []
    for _ in range(n):
        verb = random.choice(["Review", "Call", "Draft", "Schedule", "Update", "Email"])
        rows.append(
            {
                "id": fake.uuid4().replace("-", ""),
                "task": f"{verb} {fake.bs()}",
                "status": random.choice(STATUSES),
            }
        )
    return rows
