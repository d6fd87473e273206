"""Redis helpers for the cached trending ranking."""

from __future__ import annotations

from typing import Sequence

from cookoff.infra.redis import redis_client

TRENDING_KEY = "trending:posts"


async def replace_ranking(entries: Sequence[tuple[str, float]], *, max_length: int) -> None:
    pipe = redis_client.pipeline(transaction=True)
    pipe.delete(TRENDING_KEY)
    if entries:
        mapping = {item_id: float(score) for item_id, score in entries[:max_length]}
        pipe.zadd(TRENDING_KEY, mapping)
    await pipe.execute()


async def fetch_ranking(*, limit: int, offset: int = 0) -> list[tuple[str, float]]:
    stop = offset + limit - 1
    rows = await redis_client.zrevrange(TRENDING_KEY, offset, stop, withscores=True)
    return [(str(member), float(score)) for member, score in rows]


__all__ = ["TRENDING_KEY", "fetch_ranking", "replace_ranking"]
