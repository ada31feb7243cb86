"""Release orchestration.

- resolver: current and next version
- updater: version fan-out to project files
- gate: commit/tag/push confirmation
- tasks: fail-fast task queue
- run: the release lifecycle wiring them together
"""

from __future__ import annotations
