"""Example: Concatenating HTTP/HTTPS resources with local files."""

from catstream.reader import MultiSourceReader
from catstream.strategies import URIStrategy

# URLs and local paths can be mixed; the scheme picks the strategy
reader = MultiSourceReader(
    [
        "https://www.rfc-editor.org/rfc/rfc2616.txt",
        "README.md",
    ],
    URIStrategy(timeout=60),
)

# Or use an explicit HTTPStrategy for authentication
# from catstream.strategies import HTTPStrategy
# strategy = HTTPStrategy(
#     headers={"Authorization": "Bearer token123"},
#     timeout=60,
# )
# reader = MultiSourceReader(["https://example.com/private/log.txt"], strategy)

with reader:
    total = 0
    while True:
        try:
            chunk = reader.read(65536)
        except OSError as e:
            print(f"Skipping source: {e}")
            reader.next_source()
            continue
        if not chunk:
            break
        total += len(chunk)
        print(f"{reader.current_source}: {len(chunk)} bytes")

print(f"\nRead {total} bytes in total")
