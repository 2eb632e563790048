"""Per-light desired-state cache.

Entries record the state a coordinator last *intended* to apply, written
before the device confirms the push. An absent entry means the state is
unknown, which is distinct from every :class:`LightState` including
``OFF``.
"""

from __future__ import annotations

from jenkinshue.exceptions import InvalidArgumentError
from jenkinshue.models.light import LightState


def normalize_light_id(light_id: str | int) -> str:
    """Return the canonical cache key for *light_id*.

    ``3`` and ``"3"`` address the same light.
    """
    if isinstance(light_id, bool) or light_id is None:
        raise InvalidArgumentError("light id is missing")
    key = str(light_id).strip()
    if not key:
        raise InvalidArgumentError("light id is missing")
    return key


class LightStateCache:
    """In-memory ``light id -> LightState`` map owned by one coordinator."""

    def __init__(self) -> None:
        self._states: dict[str, LightState] = {}

    def get(self, light_id: str | int) -> LightState | None:
        """Return the recorded state, or ``None`` when unknown."""
        return self._states.get(normalize_light_id(light_id))

    def set(self, light_id: str | int, state: LightState) -> None:
        self._states[normalize_light_id(light_id)] = state

    def reset(self, light_id: str | int) -> None:
        """Forget the recorded state so the next update counts as a change."""
        self._states.pop(normalize_light_id(light_id), None)

    def differs(self, light_id: str | int, state: LightState) -> bool:
        return self.get(light_id) is not state

    def snapshot(self) -> dict[str, LightState]:
        """Copy of all known entries."""
        return dict(self._states)

    def __contains__(self, light_id: object) -> bool:
        if not isinstance(light_id, (str, int)):
            return False
        return str(light_id).strip() in self._states

    def __len__(self) -> int:
        return len(self._states)
