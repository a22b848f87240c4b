"""Нагрузочный тест запущенного сервиса.

Запуск: `python loadtest/load_test.py` при поднятом сервисе на BASE_URL.
"""

import asyncio
import random
import statistics
import time
import uuid

import httpx
from faker import Faker

fake = Faker()
BASE_URL = "http://localhost:8080"


def random_id(prefix: str) -> str:
    """Сгенерировать уникальный ID с префиксом."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


async def create_team(client: httpx.AsyncClient, num_users: int) -> tuple[str, list[str]]:
    """Создать команду с уникальными пользователями."""
    team_name = random_id("team")
    members = [
        {"user_id": random_id("u"), "username": fake.name(), "is_active": True}
        for _ in range(num_users)
    ]
    response = await client.post(
        f"{BASE_URL}/team/add", json={"team_name": team_name, "members": members}
    )
    response.raise_for_status()
    return team_name, [m["user_id"] for m in members]


async def create_pr(client: httpx.AsyncClient, author_id: str) -> dict:
    """Создать PR; ревьюверы назначаются сервисом."""
    response = await client.post(
        f"{BASE_URL}/pullRequest/create",
        json={
            "pull_request_id": random_id("pr"),
            "pull_request_name": fake.sentence(),
            "author_id": author_id,
        },
    )
    response.raise_for_status()
    return response.json()["pr"]


class RequestStats:
    def __init__(self, label: str):
        self.label = label
        self.count = 0
        self.server_errors = 0
        self.response_times: list[float] = []
        self.error_codes: dict[str, int] = {}

    def record(self, duration_ms: float, status_code: int, code: str | None = None):
        self.count += 1
        self.response_times.append(duration_ms)
        if code:
            self.error_codes[code] = self.error_codes.get(code, 0) + 1
        if status_code >= 500:
            self.server_errors += 1

    def print_results(self, test_duration: int):
        print(f"\nРезультаты {self.label}:")
        print(f"  Всего запросов: {self.count}")
        print(f"  Ошибок (5xx): {self.server_errors}")
        if not self.response_times:
            return
        ordered = sorted(self.response_times)
        print(f"  RPS: {self.count / test_duration:.2f}")
        print(
            f"  Время ответа (мс): среднее={statistics.mean(ordered):.2f}, "
            f"P50={ordered[len(ordered) // 2]:.2f}, P95={ordered[int(len(ordered) * 0.95)]:.2f}"
        )
        if self.error_codes:
            print(f"  Доменные ошибки: {self.error_codes}")


class SharedData:
    """Команды и открытые PR, созданные во время теста."""

    def __init__(self):
        self.teams: dict[str, list[str]] = {}
        self.open_prs: dict[str, list[str]] = {}

    def random_user(self) -> str:
        return random.choice(random.choice(list(self.teams.values())))


async def _timed(stats: RequestStats, request):
    start = time.perf_counter()
    response = await request
    code = None
    if response.status_code >= 400:
        try:
            code = response.json().get("error", {}).get("code")
        except ValueError:
            code = f"HTTP_{response.status_code}"
    stats.record((time.perf_counter() - start) * 1000, response.status_code, code)
    return response


async def _read_once(client: httpx.AsyncClient, data: SharedData, stats: RequestStats):
    choice = random.randint(0, 2)
    if choice == 0:
        request = client.get(f"{BASE_URL}/users/getReview", params={"user_id": data.random_user()})
    elif choice == 1:
        request = client.get(f"{BASE_URL}/stats")
    else:
        team_name = random.choice(list(data.teams))
        request = client.get(f"{BASE_URL}/team/get", params={"team_name": team_name})
    await _timed(stats, request)


async def _write_once(client: httpx.AsyncClient, data: SharedData, stats: RequestStats):
    choice = random.randint(0, 3)
    if choice == 0 or not data.open_prs:
        response = await _timed(
            stats,
            client.post(
                f"{BASE_URL}/pullRequest/create",
                json={
                    "pull_request_id": random_id("pr"),
                    "pull_request_name": fake.sentence(),
                    "author_id": data.random_user(),
                },
            ),
        )
        if response.status_code == 201:
            pr = response.json()["pr"]
            data.open_prs[pr["pull_request_id"]] = pr["assigned_reviewers"]
    elif choice == 1:
        pr_id = random.choice(list(data.open_prs))
        data.open_prs.pop(pr_id, None)
        await _timed(
            stats, client.post(f"{BASE_URL}/pullRequest/merge", json={"pull_request_id": pr_id})
        )
    elif choice == 2:
        pr_id = random.choice(list(data.open_prs))
        reviewers = data.open_prs.get(pr_id) or []
        if not reviewers:
            return
        response = await _timed(
            stats,
            client.post(
                f"{BASE_URL}/pullRequest/reassign",
                json={"pull_request_id": pr_id, "old_user_id": random.choice(reviewers)},
            ),
        )
        if response.status_code == 200:
            data.open_prs[pr_id] = response.json()["pr"]["assigned_reviewers"]
    else:
        team_name = random.choice(list(data.teams))
        user_id = random.choice(data.teams[team_name])
        await _timed(
            stats,
            client.post(
                f"{BASE_URL}/team/deactivateMembers",
                json={"team_name": team_name, "user_ids": [user_id]},
            ),
        )


async def run_load_test(
    num_teams: int = 5,
    users_per_team: int = 20,
    prs_per_team: int = 10,
    concurrent_reads: int = 30,
    concurrent_writes: int = 10,
    test_duration: int = 60,
):
    print("Нагрузочное тестирование:")
    print(f"  Команд: {num_teams}, пользователей на команду: {users_per_team}")
    print(f"  Параллельно: чтение={concurrent_reads}, запись={concurrent_writes}")
    print(f"  Длительность теста: {test_duration}с\n")

    async with httpx.AsyncClient(timeout=30.0) as client:
        data = SharedData()
        for _ in range(num_teams):
            team_name, user_ids = await create_team(client, users_per_team)
            data.teams[team_name] = user_ids
            for _ in range(prs_per_team):
                pr = await create_pr(client, random.choice(user_ids))
                data.open_prs[pr["pull_request_id"]] = pr["assigned_reviewers"]

        read_stats = RequestStats("чтения")
        write_stats = RequestStats("записи")
        end_time = time.time() + test_duration

        async def worker(step, stats):
            while time.time() < end_time:
                await step(client, data, stats)
                await asyncio.sleep(0.01)

        await asyncio.gather(
            *[worker(_read_once, read_stats) for _ in range(concurrent_reads)],
            *[worker(_write_once, write_stats) for _ in range(concurrent_writes)],
        )

        read_stats.print_results(test_duration)
        write_stats.print_results(test_duration)


if __name__ == "__main__":
    asyncio.run(run_load_test())
