"""Источник случайности для выбора ревьюверов."""

import random
from typing import Sequence


class ReviewerPicker:
    """Равновероятный выбор ревьюверов.

    Каждый экземпляр владеет своим генератором, поэтому в тестах можно
    передать `random.Random(seed)` или унаследоваться и переопределить выбор.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def pick_many(self, ids: Sequence[str], n: int) -> list[str]:
        """Перемешать кандидатов и взять не больше n."""
        candidates = list(ids)
        if len(candidates) > 1:
            self.rng.shuffle(candidates)
        return candidates[:n]

    def pick_one(self, ids: Sequence[str]) -> str:
        """Выбрать одного кандидата. Список не должен быть пустым."""
        if len(ids) == 1:
            return ids[0]
        return self.rng.choice(list(ids))
