"""
Shared test helpers for Rashed tests.

In-memory stand-ins for the Redis session store and builders for completion
responses, used by both unit and API tests.
"""

from typing import Dict, Optional, Set

from openai.types.chat import ChatCompletion

TEST_USERNAME = "alice"
TEST_PASSWORD = "correct-horse-battery"


class FakeRedis:
    """Dict-backed replacement for ``RedisManager`` with the same coroutines."""

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}
        self.sets: Dict[str, Set[str]] = {}
        self.ttls: Dict[str, int] = {}

    async def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    async def setex(self, key: str, ex: int, value: str) -> bool:
        self.values[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, key: str) -> int:
        removed = int(key in self.values) + int(key in self.sets)
        self.values.pop(key, None)
        self.sets.pop(key, None)
        self.ttls.pop(key, None)
        return removed

    async def expire(self, key: str, ex: int) -> bool:
        if key not in self.values and key not in self.sets:
            return False
        self.ttls[key] = ex
        return True

    async def sadd(self, key: str, *members: str) -> int:
        members_set = self.sets.setdefault(key, set())
        before = len(members_set)
        members_set.update(members)
        return len(members_set) - before

    async def srem(self, key: str, *members: str) -> int:
        members_set = self.sets.get(key, set())
        removed = len(members_set & set(members))
        members_set.difference_update(members)
        return removed

    async def smembers(self, key: str) -> Set[str]:
        return set(self.sets.get(key, set()))

    async def ping(self) -> bool:
        return True


def make_completion(content: Optional[str], model: str = "gpt-4o") -> ChatCompletion:
    """Build a one-choice chat completion as returned by the provider."""
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1700000000,
            "model": model,
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "stop",
                    "message": {"role": "assistant", "content": content},
                }
            ],
            "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
        }
    )
