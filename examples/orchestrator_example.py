"""Small example showing `CollageOrchestrator` usage with a dummy fetcher.

Run directly to write `example_collage.jpg`:
    python examples/orchestrator_example.py
"""
import io

from PIL import Image

from collage_generator import CollageOrchestrator, CollageRequest, FetchError


class DummyFetcher:
    COLORS = [(239, 68, 68), (59, 130, 246), (16, 185, 129), (245, 158, 11)]

    def fetch(self, ref, timeout):
        if ref.endswith("missing"):
            raise FetchError("status 404", status=404)
        idx = int(ref.rsplit("/", 1)[-1])
        buf = io.BytesIO()
        Image.new("RGB", (640, 480), self.COLORS[idx % len(self.COLORS)]).save(buf, format="JPEG")
        return buf.getvalue()


def main():
    svc = CollageOrchestrator(fetcher=DummyFetcher())
    request = CollageRequest(
        image_refs=["demo://0", "demo://1", "demo://missing", "demo://3", "demo://4"],
        title="Team Offsite",
        description="Five photos, one of them missing",
    )
    result = svc.generate(request)
    with open("example_collage.jpg", "wb") as f:
        f.write(result.image_bytes)
    print("Processed:", result.processed_count, "failed:", result.failed_count)
    for failure in result.failures:
        print(f"  #{failure.index}: {failure.error}")


if __name__ == "__main__":
    main()
