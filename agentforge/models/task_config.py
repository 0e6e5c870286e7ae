"""Task configuration models."""

from enum import Enum
from typing import Any

from agentforge.models.base import CamelModel


class TaskOutputFormat(str, Enum):
    raw = "raw"
    json = "json"
    pydantic = "pydantic"


class TaskGuardrailMode(str, Enum):
    function = "function"
    llm = "llm"


class TaskGuardrail(CamelModel):
    id: str
    mode: TaskGuardrailMode
    description: str
    active: bool | None = None
    config: dict[str, Any] | None = None


class TaskConfig(CamelModel):
    """A unit of work assignable to one agent of a team.

    ``context_tasks`` lists prerequisite task ids; together they should form
    a DAG, but nothing here enforces it.
    """

    id: str
    name: str
    slug: str | None = None
    description: str = ""
    expected_output: str = ""
    tags: list[str] | None = None

    # assignment
    agent_id: str | None = None
    allowed_tools: list[str] | None = None

    # dependencies
    context_tasks: list[str] | None = None

    # execution
    async_execution: bool | None = None
    human_review: bool | None = None
    markdown: bool | None = None
    max_execution_time: int | None = None
    max_retries: int | None = None

    config: dict[str, Any] | None = None

    # output
    output_file: str | None = None
    create_directory: bool | None = None
    output_format: TaskOutputFormat | None = None
    output_json_schema: str | None = None
    output_model_name: str | None = None

    # guardrails
    guardrail_max_retries: int | None = None
    guardrails: list[TaskGuardrail] | None = None
