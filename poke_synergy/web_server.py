"""FastAPI web server exposing team building and recommendations via REST API."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from .errors import (
    CatalogError,
    PersistenceFailure,
    StrategyNotFound,
    TeamNotFound,
    TeamSynergyError,
    UnknownType,
)
from .serialization import to_payload
from .services import TeamSession

app = FastAPI(
    title="Poke-Synergy Web API",
    description="REST API for Pokémon team building and synergy recommendations",
    version="0.1.0",
)

_session: Optional[TeamSession] = None


def get_session() -> TeamSession:
    global _session
    if _session is None:
        _session = TeamSession.from_settings()
    return _session


@contextmanager
def _domain_errors() -> Iterator[None]:
    try:
        yield
    except UnknownType as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except (TeamNotFound, StrategyNotFound) as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except PersistenceFailure as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    except TeamSynergyError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except CatalogError as exc:
        raise HTTPException(status_code=502, detail=f"Catalog unavailable: {exc}")


# Pydantic models for request/response
class AddMemberRequest(BaseModel):
    """Request model for adding a Pokémon to the roster."""

    pokemon: str
    slot: Optional[int] = Field(default=None, ge=0, le=5)


class MoveMemberRequest(BaseModel):
    from_slot: int
    to_slot: int


class SelectStrategyRequest(BaseModel):
    strategy: str
    chosen_type: Optional[str] = None


class SaveTeamRequest(BaseModel):
    name: str


class ResultResponse(BaseModel):
    """Generic wrapper around a JSON payload."""

    result: Any


def _team_payload(session: TeamSession) -> Dict[str, Any]:
    payload = session.manager.summary()
    payload["stats"] = to_payload(session.manager.stats())
    return payload


@app.get("/api/strategies", response_model=ResultResponse)
async def list_strategies(session: TeamSession = Depends(get_session)) -> ResultResponse:
    """List every strategy with its weights, tips and warnings."""
    return ResultResponse(result=[to_payload(p) for p in session.strategy_profiles()])


@app.put("/api/strategy", response_model=ResultResponse)
async def select_strategy(
    request: SelectStrategyRequest, session: TeamSession = Depends(get_session)
) -> ResultResponse:
    with _domain_errors():
        profile = session.select_strategy(request.strategy, request.chosen_type)
    return ResultResponse(result=profile.to_selection())


@app.get("/api/team", response_model=ResultResponse)
async def get_team(session: TeamSession = Depends(get_session)) -> ResultResponse:
    return ResultResponse(result=_team_payload(session))


@app.post("/api/team/members", response_model=ResultResponse)
async def add_member(
    request: AddMemberRequest, session: TeamSession = Depends(get_session)
) -> ResultResponse:
    """Add a Pokémon (by name or id) to the roster."""
    with _domain_errors():
        session.add(request.pokemon, request.slot)
    return ResultResponse(result=_team_payload(session))


@app.delete("/api/team/members/{slot}", response_model=ResultResponse)
async def remove_member(slot: int, session: TeamSession = Depends(get_session)) -> ResultResponse:
    with _domain_errors():
        session.manager.remove(slot)
    return ResultResponse(result=_team_payload(session))


@app.post("/api/team/move", response_model=ResultResponse)
async def move_member(
    request: MoveMemberRequest, session: TeamSession = Depends(get_session)
) -> ResultResponse:
    with _domain_errors():
        session.manager.move(request.from_slot, request.to_slot)
    return ResultResponse(result=_team_payload(session))


@app.delete("/api/team", response_model=ResultResponse)
async def clear_team(session: TeamSession = Depends(get_session)) -> ResultResponse:
    with _domain_errors():
        session.manager.clear()
    return ResultResponse(result=_team_payload(session))


@app.get("/api/teams", response_model=ResultResponse)
async def list_teams(session: TeamSession = Depends(get_session)) -> ResultResponse:
    teams: List[Dict[str, Any]] = [t.to_dict() for t in session.manager.list_teams()]
    return ResultResponse(result=teams)


@app.post("/api/teams", response_model=ResultResponse)
async def save_team(
    request: SaveTeamRequest, session: TeamSession = Depends(get_session)
) -> ResultResponse:
    with _domain_errors():
        team_id = session.manager.save(request.name)
    return ResultResponse(result={"id": team_id})


@app.post("/api/teams/{team_id}/load", response_model=ResultResponse)
async def load_team(team_id: str, session: TeamSession = Depends(get_session)) -> ResultResponse:
    with _domain_errors():
        session.manager.load(team_id)
    return ResultResponse(result=_team_payload(session))


@app.delete("/api/teams/{team_id}", response_model=ResultResponse)
async def delete_team(team_id: str, session: TeamSession = Depends(get_session)) -> ResultResponse:
    with _domain_errors():
        deleted = session.manager.delete(team_id)
    return ResultResponse(result=deleted)


@app.get("/api/recommendations/strategy", response_model=ResultResponse)
async def recommend_for_strategy(
    strategy: Optional[str] = Query(None, description="Strategy name; defaults to the active one"),
    chosen_type: Optional[str] = Query(None, description="Type for the single-type strategy"),
    session: TeamSession = Depends(get_session),
) -> ResultResponse:
    """Rank catalog Pokémon for the roster under a strategy."""
    with _domain_errors():
        result = session.recommend_for_strategy(strategy, chosen_type)
    return ResultResponse(result=to_payload(result))


@app.get("/api/recommendations/member", response_model=ResultResponse)
async def recommend_for_member(
    pokemon: str = Query(..., description="Reference Pokémon name or id"),
    session: TeamSession = Depends(get_session),
) -> ResultResponse:
    """Rank catalog Pokémon that pair well with a reference Pokémon."""
    with _domain_errors():
        result = session.recommend_for_member(pokemon)
    return ResultResponse(result=to_payload(result))


@app.get("/api/assessment", response_model=ResultResponse)
async def assess_team(session: TeamSession = Depends(get_session)) -> ResultResponse:
    assessment = session.assess()
    return ResultResponse(result=to_payload(assessment) if assessment else None)


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Entry point for running the web server."""
    import uvicorn

    print(f"[poke-synergy-web] Starting web server at http://{host}:{port}")
    print("[poke-synergy-web] Press Ctrl+C to stop.")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
