import json
import logging
import math
from datetime import datetime

from superadventure.settings import HIGH_SCORE_LIMIT, STORAGE_PREFIX

logger = logging.getLogger(__name__)


def default_stats():
    return {"gamesPlayed": 0, "gamesWon": 0, "lastPlayed": None}


def is_number(value):
    # json accepts NaN and Infinity
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def valid_score_entry(entry):
    return (isinstance(entry, dict) and
            is_number(entry.get("score")) and
            is_number(entry.get("time", 0)) and
            is_number(entry.get("coins", 0)))


def rank_scores(scores, limit=HIGH_SCORE_LIMIT):
    """Highest score first, faster time first on ties."""
    ordered = sorted(scores, key=lambda s: (-s.get("score", 0), s.get("time", 0)))
    return ordered[:limit]


class GameBackend:
    """High scores and play statistics on top of a key-value store."""

    def __init__(self, storage, prefix=STORAGE_PREFIX, now=None):
        self.storage = storage
        self.prefix = prefix
        self._now = now or datetime.now

    @property
    def scores_key(self):
        return self.prefix + "highscores"

    @property
    def stats_key(self):
        return self.prefix + "stats"

    async def _load(self, key, default):
        raw = await self.storage.get(key)
        if raw is None:
            return default
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring corrupt data under %s", key)
            return default
        if not isinstance(value, type(default)):
            logger.warning("Ignoring unexpected data under %s", key)
            return default
        return value

    async def get_high_scores(self):
        scores = await self._load(self.scores_key, [])
        return [s for s in scores if valid_score_entry(s)]

    async def get_high_score(self):
        scores = await self.get_high_scores()
        return scores[0].get("score", 0) if scores else 0

    async def save_score(self, name, score, coins, level, time_ms):
        now = self._now()
        entry = {
            "name": name,
            "score": score,
            "coins": coins,
            "level": level,
            "time": time_ms,
            "timestamp": now.isoformat(),
            "date": now.strftime("%d/%m/%Y"),
        }
        scores = await self.get_high_scores()
        scores.append(entry)
        top = rank_scores(scores)
        await self.storage.set(self.scores_key, json.dumps(top))
        logger.info("Saved score %d for %s", score, name)
        return top

    async def get_stats(self):
        stored = await self._load(self.stats_key, {})
        stats = default_stats()
        for field in ("gamesPlayed", "gamesWon"):
            value = stored.get(field)
            if is_number(value):
                stats[field] = max(0, int(value))
        if isinstance(stored.get("lastPlayed"), str):
            stats["lastPlayed"] = stored["lastPlayed"]
        return stats

    async def update_stats(self, won=False):
        stats = await self.get_stats()
        stats["gamesPlayed"] += 1
        if won:
            stats["gamesWon"] += 1
        stats["lastPlayed"] = self._now().isoformat()
        await self.storage.set(self.stats_key, json.dumps(stats))
        return stats

    async def summary(self):
        stats = await self.get_stats()
        scores = await self.get_high_scores()
        return {
            **stats,
            "bestScore": scores[0].get("score", 0) if scores else 0,
            "mostCoins": max((s.get("coins", 0) for s in scores), default=0),
        }
