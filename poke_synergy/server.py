"""FastMCP server exposing team building and recommendation tools."""

from __future__ import annotations

import sys
from typing import Annotated, Any, Dict, List, Optional

from fastmcp import FastMCP

from .serialization import to_payload
from .services import TeamSession

app = FastMCP("poke-synergy", version="0.1.0")
_session: Optional[TeamSession] = None


def _get_session() -> TeamSession:
    global _session
    if _session is None:
        _session = TeamSession.from_settings()
    return _session


def _team_payload(session: TeamSession) -> Dict[str, Any]:
    payload = session.manager.summary()
    payload["stats"] = to_payload(session.manager.stats())
    return payload


@app.tool()
def list_strategies() -> List[Dict[str, Any]]:
    """List every team strategy with its weights, tips and warnings."""

    return [to_payload(profile) for profile in _get_session().strategy_profiles()]


@app.tool()
def recommend_for_strategy(
    strategy: Annotated[Optional[str], "Strategy name, e.g. 'offensive'; defaults to the active one"] = None,
    chosen_type: Annotated[Optional[str], "Type for the single-type strategy, e.g. 'water'"] = None,
) -> Dict[str, Any]:
    """Rank catalog Pokémon for the current roster under a strategy."""

    return to_payload(_get_session().recommend_for_strategy(strategy, chosen_type))


@app.tool()
def recommend_for_member(
    pokemon: Annotated[str, "Reference Pokémon name or id"],
) -> Dict[str, Any]:
    """Rank catalog Pokémon that pair well with a reference Pokémon."""

    return to_payload(_get_session().recommend_for_member(pokemon))


@app.tool()
def assess_team() -> Optional[Dict[str, Any]]:
    """Assess how well the roster fits the active strategy."""

    assessment = _get_session().assess()
    return to_payload(assessment) if assessment else None


@app.tool()
def get_team() -> Dict[str, Any]:
    """Return the roster, active strategy and aggregate stats."""

    return _team_payload(_get_session())


@app.tool()
def add_to_team(
    pokemon: Annotated[str, "Pokémon name or id"],
    slot: Annotated[Optional[int], "Slot 0-5; first empty slot when omitted"] = None,
) -> Dict[str, Any]:
    """Add a Pokémon to the roster."""

    session = _get_session()
    session.add(pokemon, slot)
    return _team_payload(session)


@app.tool()
def remove_from_team(slot: Annotated[int, "Slot 0-5"]) -> Dict[str, Any]:
    """Empty a roster slot."""

    session = _get_session()
    session.manager.remove(slot)
    return _team_payload(session)


@app.tool()
def move_team_member(
    from_slot: Annotated[int, "Source slot 0-5"],
    to_slot: Annotated[int, "Destination slot 0-5"],
) -> Dict[str, Any]:
    """Swap the contents of two roster slots."""

    session = _get_session()
    session.manager.move(from_slot, to_slot)
    return _team_payload(session)


@app.tool()
def clear_team() -> Dict[str, Any]:
    """Empty every roster slot."""

    session = _get_session()
    session.manager.clear()
    return _team_payload(session)


@app.tool()
def select_strategy(
    strategy: Annotated[str, "Strategy name"],
    chosen_type: Annotated[Optional[str], "Type for the single-type strategy"] = None,
) -> Dict[str, Any]:
    """Make a strategy the active one for this session."""

    return _get_session().select_strategy(strategy, chosen_type).to_selection()


@app.tool()
def save_team(name: Annotated[str, "Name for the saved team"]) -> Dict[str, str]:
    """Snapshot the roster under a new id."""

    return {"id": _get_session().manager.save(name)}


@app.tool()
def load_team(team_id: Annotated[str, "Saved team id"]) -> Dict[str, Any]:
    """Replace the roster with a saved team."""

    session = _get_session()
    session.manager.load(team_id)
    return _team_payload(session)


@app.tool()
def delete_team(team_id: Annotated[str, "Saved team id"]) -> bool:
    """Delete a saved team."""

    return _get_session().manager.delete(team_id)


@app.tool()
def list_saved_teams() -> List[Dict[str, Any]]:
    """List saved teams with their members."""

    return [team.to_dict() for team in _get_session().manager.list_teams()]


def run() -> None:
    """Entry point for `python -m poke_synergy.server` or console script."""

    print("[poke-synergy] Starting MCP server. Press Ctrl+C to stop.", file=sys.stderr)
    app.run()


if __name__ == "__main__":
    run()
