"""Example: Reading a sequence of S3 objects as one stream."""

import io

from catstream.reader import MultiSourceReader
from catstream.strategies import URIStrategy

# Read S3 objects by URI (auto-detection)
reader = MultiSourceReader(
    ["s3://my-bucket/logs/part-0000.txt", "s3://my-bucket/logs/part-0001.txt"],
    URIStrategy(),
)

# Or use an explicit S3Strategy for more control
# from catstream.strategies import S3Strategy
# import boto3
# s3_client = boto3.client("s3", region_name="us-east-1")
# reader = MultiSourceReader(["s3://my-bucket/logs/part-0000.txt"], S3Strategy(client=s3_client))

# Decode the combined stream line by line
with io.TextIOWrapper(io.BufferedReader(reader), encoding="utf-8") as text:
    try:
        for i, line in enumerate(text, 1):
            print(f"{i}: {line}", end="")
            if i >= 10:  # Print first 10 lines
                break
    except KeyboardInterrupt:
        print("\nUser interrupted. Exiting.")
