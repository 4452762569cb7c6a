from __future__ import annotations

# Single-shot REST calls (repository lookup, contents, releases)
GITHUB_TIMEOUT_SECONDS = 60.0
