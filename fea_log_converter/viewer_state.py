"""Builds the initial presentation state for the log viewer."""

from typing import Any, Iterable

from fea_log_converter.models import NormalizedEvent

VIEWER_LEVELS = ("Error", "Warn", "Info", "Log", "Debug", "Verbose")
CLIENT_CHANNELS = ("console", "dev", "system", "perf")
HIGHLIGHT_SLOTS = 4

COLUMN_DEFS = (
    {"field": "timeElapsedFromStartup", "name": "Time"},
    {"field": "previousRowTimeDelta", "name": "Row Delta"},
    {"field": "category", "name": "Category"},
)


def distinct_client_names(events: Iterable[NormalizedEvent]) -> list[str]:
    """Non-blank client names in order of first appearance."""
    names: list[str] = []
    seen: set[str] = set()
    for event in events:
        name = event.client_name
        if name and name.strip() and name not in seen:
            seen.add(name)
            names.append(name)
    return names


def _level_states() -> dict[str, bool]:
    return {level: True for level in VIEWER_LEVELS}


def _initial_client_state() -> dict[str, bool]:
    state = _level_states()
    state["Info"] = False
    state["LocalOnly"] = True
    return state


def _column_defs() -> list[dict[str, str]]:
    return [dict(col) for col in COLUMN_DEFS]


def _client_state(name: str) -> dict[str, Any]:
    state: dict[str, Any] = {channel: _initial_client_state() for channel in CLIENT_CHANNELS}
    state.update({
        "clientChannel": name,
        "showAdvancedViewFilters": False,
        "wrapLog": False,
        "showStackStraceInLog": False,
        "filter": {"logic": "OR"},
        "showTimeElapsedFromStartup": True,
        "clientListVisible": True,
        "colDefs": _column_defs(),
        "windowName": name,
    })
    return state


def build_viewer_state(client_names: list[str]) -> dict[str, Any]:
    """Return the ``log_state.json`` document for *client_names*."""
    registered_clients = {
        name: {
            "name": name,
            "viewId": None,
            "centralLoggerNamePrefix": "",
            "displayName": name,
        }
        for name in client_names
    }

    persist_state = {
        "logState": _level_states(),
        "plainTextConsole": True,
        "filterHighlights": True,
        "highlightString": [{"str": ""} for _ in range(HIGHLIGHT_SLOTS)],
        "hideInactiveState": False,
        "currentCategory": "system",
        "devModeState": True,
        "systemModeState": True,
        "perfModeState": True,
        "initialClientStateDefault": _initial_client_state(),
        "showAdvancedViewFilters": False,
        "wrapLog": False,
        "showStackStraceInLog": False,
        "filter": {"logic": "OR"},
        "showTimeElapsedFromStartup": True,
        "colDefs": _column_defs(),
        "visibleCols": ["timeElapsedFromStartup"],
        "clientListVisible": True,
        "isPersisted": True,
        "clientState": {name: _client_state(name) for name in client_names},
        "showClientState": {name: True for name in client_names},
    }

    return {
        "registeredClientNames": list(client_names),
        "registeredClients": registered_clients,
        "persistState": persist_state,
    }
