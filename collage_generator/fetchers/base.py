from typing import Protocol


class ImageFetcher(Protocol):
    """Protocol describing a source of raw image bytes.

    Implementations make a single attempt per call and raise FetchError on
    any failure, including when `timeout` seconds elapse.
    """

    def fetch(self, ref: str, timeout: float) -> bytes:
        ...
