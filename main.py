"""Command-line interface for building teams and getting synergy recommendations."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Any, Dict, List

from poke_synergy.config import Settings
from poke_synergy.errors import CatalogError, TeamSynergyError
from poke_synergy.serialization import to_payload
from poke_synergy.services import TeamSession


def _debug_print(enabled: bool, message: str) -> None:
    if enabled:
        sys.stderr.write(f"[debug] {message}\n")


def _format_recommendations(recommendations: List[Dict[str, Any]]) -> List[str]:
    lines: List[str] = []
    for rank, rec in enumerate(recommendations, start=1):
        member = rec["member"]
        types = "/".join(member.get("types", [])) or "unknown"
        tags = ", ".join(rec.get("synergy", []))
        lines.append(f"  {rank:>2}. {member['name']} ({types}) score {rec['score']:.1f}")
        if tags:
            lines.append(f"      synergy: {tags}")
        for reason in rec.get("reasons", []):
            lines.append(f"      - {reason}")
    return lines


def _humanize_result(payload: Dict[str, Any]) -> str:
    lines: List[str] = []
    if "strategy" in payload:
        strategy = payload["strategy"]
        lines.extend([f"{strategy['name']}: {strategy['description']}", ""])
    else:
        lines.extend([f"Partners for {payload['reference']['name']}", ""])

    analysis = payload.get("analysis") or {}
    if analysis.get("weaknesses"):
        lines.append("Shared weaknesses: " + ", ".join(analysis["weaknesses"]))
    if analysis.get("strengths"):
        lines.append("Shared resistances: " + ", ".join(analysis["strengths"]))
    for note in analysis.get("recommendations", []):
        lines.append(f"  * {note}")
    lines.append("")

    recs = payload.get("recommendations") or []
    if recs:
        lines.append("Recommendations:")
        lines.extend(_format_recommendations(recs))
        lines.append("")
    else:
        lines.extend(["No candidates matched.", ""])

    tips = payload.get("tips") or []
    if tips:
        lines.append("Tips:")
        lines.extend(f"  - {tip}" for tip in tips)
        lines.append("")

    warnings = payload.get("warnings") or []
    if warnings:
        lines.append("Warnings:")
        lines.extend(f"  - {warning}" for warning in warnings)

    return "\n".join(lines).strip()


def _humanize_team(summary: Dict[str, Any], stats: Dict[str, Any]) -> str:
    lines = [f"Strategy: {summary['strategy']['kind']}"]
    if summary["strategy"].get("chosen_type"):
        lines[0] += f" ({summary['strategy']['chosen_type']})"
    lines.append(f"Members: {summary['size']}/6")
    for slot, member in enumerate(summary["roster"]):
        if member:
            lines.append(f"  [{slot}] {member['name']} ({'/'.join(member['types'])})")
        else:
            lines.append(f"  [{slot}] -")
    if stats["size"]:
        averages = stats["averages"]
        lines.append(
            "Average stats: "
            + ", ".join(f"{name} {value}" for name, value in averages.items())
        )
    return "\n".join(lines)


def _emit(args: argparse.Namespace, payload: Any, text: str) -> None:
    if args.json:
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build Pokémon teams with synergy recommendations")
    parser.add_argument("--store", help="Path to the JSON state file")
    parser.add_argument("--limit", type=int, help="Number of catalog Pokémon to consider")
    parser.add_argument("--json", action="store_true", help="Emit results as JSON")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug progress information to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("strategies", help="List the available strategies")

    recommend = sub.add_parser("recommend", help="Recommend Pokémon for the team")
    target = recommend.add_mutually_exclusive_group()
    target.add_argument("--strategy", help="Strategy to recommend for (default: active)")
    target.add_argument("--member", help="Reference Pokémon name or id")
    recommend.add_argument("--type", dest="chosen_type", help="Type for the single-type strategy")

    sub.add_parser("assess", help="Assess the roster against the active strategy")

    select = sub.add_parser("select", help="Select the active strategy")
    select.add_argument("strategy")
    select.add_argument("--type", dest="chosen_type", help="Type for the single-type strategy")

    team = sub.add_parser("team", help="Inspect or edit the roster")
    team_sub = team.add_subparsers(dest="action", required=True)
    team_sub.add_parser("show")
    add = team_sub.add_parser("add")
    add.add_argument("pokemon", help="Pokémon name or id")
    add.add_argument("--slot", type=int)
    remove = team_sub.add_parser("remove")
    remove.add_argument("slot", type=int)
    move = team_sub.add_parser("move")
    move.add_argument("from_slot", type=int)
    move.add_argument("to_slot", type=int)
    team_sub.add_parser("clear")
    save = team_sub.add_parser("save")
    save.add_argument("name")
    load = team_sub.add_parser("load")
    load.add_argument("team_id")
    delete = team_sub.add_parser("delete")
    delete.add_argument("team_id")
    team_sub.add_parser("list")
    return parser


def _run_team(args: argparse.Namespace, session: TeamSession) -> None:
    manager = session.manager
    if args.action == "add":
        member = session.add(args.pokemon, args.slot)
        _debug_print(args.debug, f"Added {member.name} (#{member.id})")
    elif args.action == "remove":
        manager.remove(args.slot)
    elif args.action == "move":
        manager.move(args.from_slot, args.to_slot)
    elif args.action == "clear":
        manager.clear()
    elif args.action == "save":
        team_id = manager.save(args.name)
        _emit(args, {"id": team_id}, f"Saved {args.name!r} as {team_id}")
        return
    elif args.action == "load":
        manager.load(args.team_id)
    elif args.action == "delete":
        manager.delete(args.team_id)
    elif args.action == "list":
        teams = [team.to_dict() for team in manager.list_teams()]
        text = "\n".join(
            f"{team['id']}  {team['name']}  ({sum(1 for m in team['members'] if m)} members)"
            for team in teams
        )
        _emit(args, teams, text or "No saved teams.")
        return

    summary = manager.summary()
    stats = to_payload(manager.stats())
    _emit(args, {"team": summary, "stats": stats}, _humanize_team(summary, stats))


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _debug_print(args.debug, f"Arguments parsed: {args}")

    settings = Settings.from_env()
    if args.store:
        settings = replace(settings, store_path=args.store)
    if args.limit:
        settings = replace(settings, catalog_limit=args.limit)
    _debug_print(args.debug, f"Using state file {settings.store_path}")

    try:
        session = TeamSession.from_settings(
            settings, debug_logger=(lambda msg: _debug_print(args.debug, msg))
        )
        if args.command == "strategies":
            profiles = [to_payload(p) for p in session.strategy_profiles()]
            text = "\n".join(f"{p['kind']:<14} {p['description']}" for p in profiles)
            _emit(args, profiles, text)
        elif args.command == "recommend":
            if args.member:
                result = session.recommend_for_member(args.member)
            else:
                result = session.recommend_for_strategy(args.strategy, args.chosen_type)
            payload = to_payload(result)
            _emit(args, payload, _humanize_result(payload))
        elif args.command == "assess":
            assessment = session.assess()
            if assessment is None:
                _emit(args, None, "Add Pokémon to the team to assess it.")
            else:
                payload = to_payload(assessment)
                text = [f"Coverage: {payload['coverage']}/100"]
                text += [f"  + {s}" for s in payload["strengths"]]
                text += [f"  - {w}" for w in payload["weaknesses"]]
                text += [f"  > {r}" for r in payload["recommendations"]]
                _emit(args, payload, "\n".join(text))
        elif args.command == "select":
            profile = session.select_strategy(args.strategy, args.chosen_type)
            _emit(args, profile.to_selection(), f"Active strategy: {profile.name}")
        elif args.command == "team":
            _run_team(args, session)
    except (TeamSynergyError, CatalogError) as exc:
        raise SystemExit(f"Error: {exc}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
