"""API routes for exporting agents and teams.

Agents export to a zip archive; teams export to a JSON document.
"""

import os

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from agentforge.export import (
    ArchiveError,
    UnsupportedProviderError,
    assemble_async,
    export_agent,
    export_team_json,
)
from agentforge.models.agent_config import AgentConfig
from agentforge.models.export_bundle import ExportBundle, ExportTarget
from agentforge.models.flow_graph import FlowData
from agentforge.models.task_config import TaskConfig
from agentforge.models.team_config import TeamConfig

router = APIRouter()


class ExportRequest(BaseModel):
    """request body for exporting a single agent."""

    agent: AgentConfig
    tasks: list[TaskConfig] = []
    flow: FlowData | None = None  # pocketflow target only


class ExportPreview(BaseModel):
    """generated files returned as JSON instead of an archive."""

    name: str
    archive_filename: str
    files: dict[str, str]


def _strict_providers() -> bool:
    return os.getenv("EXPORT_STRICT_PROVIDERS", "false").lower() == "true"


def _build_bundle(target: ExportTarget, request: ExportRequest) -> ExportBundle:
    try:
        return export_agent(
            request.agent,
            request.tasks,
            target=target,
            flow=request.flow,
            strict=_strict_providers(),
        )
    except UnsupportedProviderError as e:
        raise HTTPException(status_code=422, detail=str(e))


async def _zip_response(bundle: ExportBundle) -> Response:
    try:
        data = await assemble_async(bundle.files)
    except ArchiveError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(
        content=data,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{bundle.archive_filename}"'},
    )


@router.post("/export/node")
async def export_node(request: ExportRequest) -> Response:
    """export an agent as a Node HTTP service archive."""
    return await _zip_response(_build_bundle(ExportTarget.node, request))


@router.post("/export/pocketflow")
async def export_pocketflow(request: ExportRequest) -> Response:
    """export an agent and its flow graph as a Python script archive."""
    return await _zip_response(_build_bundle(ExportTarget.pocketflow, request))


@router.post("/export/{target}/files")
def preview_export(target: ExportTarget, request: ExportRequest) -> ExportPreview:
    """return the generated files without packaging them."""
    bundle = _build_bundle(target, request)
    return ExportPreview(
        name=bundle.name,
        archive_filename=bundle.archive_filename,
        files=bundle.files,
    )


@router.post("/export/team")
def export_team(team: TeamConfig) -> Response:
    """export a full team as a JSON document."""
    filename, text = export_team_json(team)
    return Response(
        content=text,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
