import random
import re
import time

# Alphabet is in ASCII order so generated keys sort by creation time
PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"

FORBIDDEN_KEY_CHARS = re.compile(r"[.#$/\[\]]")


def current_millis() -> int:
    return int(time.time() * 1000)


class PushIdGenerator:
    """Generates 20 character keys: 8 chars of timestamp followed by 12 random chars.

    Keys generated within the same millisecond reuse the previous random part
    incremented by one, so they still sort in generation order.
    """

    def __init__(self) -> None:
        self.last_push_time = 0
        self.last_rand_chars: list[int] = [0] * 12

    def __call__(self, now: int | None = None) -> str:
        if now is None:
            now = current_millis()

        duplicate_time = now == self.last_push_time
        self.last_push_time = now

        time_chars = []
        for _ in range(8):
            time_chars.append(PUSH_CHARS[now % 64])
            now //= 64
        time_part = "".join(reversed(time_chars))

        if not duplicate_time:
            self.last_rand_chars = [random.randrange(64) for _ in range(12)]
        else:
            i = 11
            while i >= 0 and self.last_rand_chars[i] == 63:
                self.last_rand_chars[i] = 0
                i -= 1
            if i >= 0:
                self.last_rand_chars[i] += 1

        return time_part + "".join(PUSH_CHARS[c] for c in self.last_rand_chars)


generate_push_id = PushIdGenerator()


def sanitize_key(public_id: str) -> str:
    return FORBIDDEN_KEY_CHARS.sub("_", public_id)
