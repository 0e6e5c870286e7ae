"""Export one agent of a team to a runnable project archive.

Reads the team from a JSON file (as saved by "Export JSON" in the builder)
or fetches it from the builder backend, then writes ``<slug>-runtime.zip``
or ``<slug>-pocketflow.zip`` to the output directory.

    python -m agentforge.scripts.export_project --team-file team.json --target pocketflow
"""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from agentforge.export import (
    ArchiveError,
    UnsupportedProviderError,
    export_agent,
    write_archive,
)
from agentforge.models.export_bundle import ExportTarget
from agentforge.models.flow_graph import FlowData, FlowParseError
from agentforge.models.team_config import TeamConfig
from agentforge.sdk.team_loader import TeamLoader, TeamLoaderError


def load_team(args: argparse.Namespace) -> TeamConfig:
    if args.team_file:
        return TeamConfig.model_validate_json(Path(args.team_file).read_text())
    return TeamLoader(base_url=args.base_url).get_team(args.team_id)


def load_flow(path: str | None) -> FlowData | None:
    if not path:
        return None
    return FlowData.from_completion(Path(path).read_text())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export an agent configuration as a standalone runnable project."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--team-file",
        type=str,
        help="Path to a team JSON document",
    )
    source.add_argument(
        "--team-id",
        type=str,
        help="Team id to fetch from the builder backend",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default="http://localhost:8000",
        help="Builder backend URL used with --team-id (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--agent",
        type=str,
        default=None,
        help="Agent id or slug to export (default: first agent of the team)",
    )
    parser.add_argument(
        "--target",
        choices=[target.value for target in ExportTarget],
        default=ExportTarget.node.value,
        help="Target runtime (default: node)",
    )
    parser.add_argument(
        "--flow-file",
        type=str,
        default=None,
        help="Flow graph JSON for the pocketflow target",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="./exports",
        help="Directory for the archive (default: ./exports)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of exporting a runtime that cannot call the agent's provider",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        team = load_team(args)
        flow = load_flow(args.flow_file)
    except (OSError, ValidationError, TeamLoaderError, FlowParseError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not team.agents:
        print(f"Error: team {team.id} has no agents", file=sys.stderr)
        return 1

    agent = team.get_agent(args.agent) if args.agent else team.agents[0]
    if agent is None:
        print(f"Error: agent not found in team {team.id}: {args.agent}", file=sys.stderr)
        return 1

    try:
        bundle = export_agent(
            agent,
            team.tasks,
            target=args.target,
            flow=flow,
            strict=args.strict,
        )
        path = write_archive(bundle.files, Path(args.output_dir) / bundle.archive_filename)
    except (UnsupportedProviderError, ArchiveError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Exported {agent.name} ({args.target})")
    print(f"  Archive: {path}")
    print(f"  Files: {len(bundle.files)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
