"""Example: Reading several local files (and stdin) as one stream."""

import sys

from catstream.reader import open_input

# Files named on the command line, or stdin if none ("-" also means stdin)
paths = sys.argv[1:]

with open_input(paths) as stream:
    line_number = 0
    last_source = None
    try:
        for line in stream:
            source = stream.raw.current_source
            if source != last_source:
                print(f"--- {source} ---")
                last_source = source
                line_number = 0
            line_number += 1
            print(f"{line_number:>6}  {line.decode('utf-8', errors='replace')}", end="")
    except FileNotFoundError as e:
        print(f"\nMissing input: {e.filename}", file=sys.stderr)

# # Or copy everything to stdout in raw chunks
# from catstream.reader import MultiSourceReader
# import shutil
# with MultiSourceReader(paths) as reader:
#     shutil.copyfileobj(reader, sys.stdout.buffer)
