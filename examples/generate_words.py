"""
Tiny helper script showing how to call the word service in-process.
Pass a word list path as the first argument to validate against it.
"""

from __future__ import annotations

import json
import sys

from wordgen.config import WordGenConfig
from wordgen.service import build_service


def main() -> None:
    config = WordGenConfig(max_length=5)
    if len(sys.argv) > 1:
        config.wordlist_paths = {"en": sys.argv[1]}
    service = build_service(config)

    for letters in ("listen", "star", "dog"):
        body = service.handle_payload(
            {"characters": letters, "minLength": 3, "filters": {"sortBy": "complexity"}}
        )
        valid = [item["word"] for item in body["data"]["combinations"] if item["isValid"]]
        print("-" * 40)
        print(f"{letters}: {body['data']['totalGenerated']} arrangements")
        print(json.dumps(valid))


if __name__ == "__main__":
    main()
