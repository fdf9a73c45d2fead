# expo_push/gzip_policy.py

import gzip
import zlib
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from expo_push.errors import PushCompressionError

GzipMode = Literal["never", "always", "threshold"]


class GzipPolicy(BaseModel):
    """
    Kiedy kompresować ciało żądania:
    - never()                      -> nigdy (domyślnie),
    - always()                     -> zawsze,
    - compress_if_larger_than(n)   -> gdy payload ma więcej niż n bajtów.
    """
    model_config = ConfigDict(frozen=True)

    mode: GzipMode = "never"
    threshold: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_threshold(self):
        if self.mode == "threshold" and self.threshold is None:
            raise ValueError("threshold mode requires a byte threshold")
        if self.mode != "threshold" and self.threshold is not None:
            raise ValueError(f"{self.mode!r} mode takes no threshold")
        return self

    @classmethod
    def never(cls) -> "GzipPolicy":
        return cls(mode="never")

    @classmethod
    def always(cls) -> "GzipPolicy":
        return cls(mode="always")

    @classmethod
    def compress_if_larger_than(cls, threshold: int) -> "GzipPolicy":
        return cls(mode="threshold", threshold=threshold)

    @classmethod
    def parse(cls, value: str) -> "GzipPolicy":
        """'never' | 'always' | '<bajty>' – format zmiennej EXPO_GZIP."""
        v = (value or "").strip().lower()
        if v in ("", "never"):
            return cls.never()
        if v == "always":
            return cls.always()
        try:
            return cls.compress_if_larger_than(int(v))
        except ValueError:
            raise ValueError(f"Invalid gzip policy {value!r} (expected never, always or a byte count)")


def should_compress(policy: GzipPolicy, payload_length: int) -> bool:
    # próg liczony na nieskompresowanym payloadzie, nierówność ostra
    if policy.mode == "always":
        return True
    if policy.mode == "threshold":
        return payload_length > policy.threshold
    return False


def gzip_body(body: bytes) -> bytes:
    try:
        return gzip.compress(body)
    except (OSError, zlib.error) as e:
        raise PushCompressionError(f"gzip encoder failed: {e}") from e
